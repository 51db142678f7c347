from sqlbulk.driver._async import RelationalExecutor

__all__ = ("RelationalExecutor",)

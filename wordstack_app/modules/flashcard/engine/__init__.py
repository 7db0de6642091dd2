from .scheduler import SchedulerEngine

__all__ = ['SchedulerEngine']

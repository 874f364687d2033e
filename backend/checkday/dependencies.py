"""
FastAPI dependency providers

Routes get their stores, clock and services from here so that tests can
swap any of them through ``app.dependency_overrides``.
"""
from fastapi import Depends

from .core.dates import Clock, local_today
from .services.daily import DailyTaskService
from .services.recap import RecapService
from .services.reporting import ErrorReporter, LoggingErrorReporter
from .services.templates import TemplateService
from .stores import (
    DailyTaskStore,
    MongoDailyTaskStore,
    MongoTemplateStore,
    MongoUserStore,
    TemplateStore,
    UserStore,
)


def get_template_store() -> TemplateStore:
    return MongoTemplateStore()


def get_daily_store() -> DailyTaskStore:
    return MongoDailyTaskStore()


def get_user_store() -> UserStore:
    return MongoUserStore()


def get_reporter() -> ErrorReporter:
    return LoggingErrorReporter()


def get_clock() -> Clock:
    return local_today


def get_template_service(
    store: TemplateStore = Depends(get_template_store),
    reporter: ErrorReporter = Depends(get_reporter),
) -> TemplateService:
    return TemplateService(store, reporter)


def get_daily_service(
    store: DailyTaskStore = Depends(get_daily_store),
    templates: TemplateService = Depends(get_template_service),
    reporter: ErrorReporter = Depends(get_reporter),
    clock: Clock = Depends(get_clock),
) -> DailyTaskService:
    return DailyTaskService(store, templates, reporter, clock)


def get_recap_service(
    store: DailyTaskStore = Depends(get_daily_store),
    reporter: ErrorReporter = Depends(get_reporter),
    clock: Clock = Depends(get_clock),
) -> RecapService:
    return RecapService(store, reporter, clock)

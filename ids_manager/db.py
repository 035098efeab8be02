"""
db.py - Façade wiring the record store, identity provider and services.
Single responsibility: build one set of services sharing a store and identity.
"""
from dataclasses import dataclass

from ids_manager.config import DB_PATH
from ids_manager.database.connection import Store
from ids_manager.database.schema import initialize_schema
from ids_manager.services.dashboard_service import DashboardService
from ids_manager.services.deliverable_service import DeliverableService
from ids_manager.services.feedback_service import FeedbackService
from ids_manager.services.headline_service import HeadlineService
from ids_manager.services.identity import OsUserIdentity
from ids_manager.services.issue_service import IssueService
from ids_manager.services.my_ids_service import MyIdsService
from ids_manager.services.user_service import UserService


@dataclass
class Services:
    store: Store
    identity: object
    headlines: HeadlineService
    issues: IssueService
    deliverables: DeliverableService
    users: UserService
    feedback: FeedbackService
    my_ids: MyIdsService
    dashboard: DashboardService


def build_services(store: Store, identity) -> Services:
    issues = IssueService(store, identity)
    return Services(
        store=store,
        identity=identity,
        headlines=HeadlineService(store, identity),
        issues=issues,
        deliverables=DeliverableService(store, identity, issues=issues),
        users=UserService(store, identity),
        feedback=FeedbackService(store, identity),
        my_ids=MyIdsService(store, identity),
        dashboard=DashboardService(store, identity),
    )


def open_services(db_path: str = DB_PATH, identity=None) -> Services:
    """Create the schema if needed and wire services (OS user identity by default)."""
    store = Store(db_path)
    initialize_schema(store)
    return build_services(store, identity or OsUserIdentity(store))

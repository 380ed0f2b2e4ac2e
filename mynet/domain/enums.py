"""Domain enumerations for the MyNet application.

Enums represent fixed sets of domain values: account roles and the
permission universe checked before any action.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Role(_ValuesMixin, str, Enum):
    """Coarse authorization category assigned to a user account.

    Assigned by administrators; a user's role does not change on its own.
    """

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    BUYER = "buyer"
    SUPPLIER = "supplier"
    ACCOUNTANT = "accountant"
    VIEWER = "viewer"


class Permission(_ValuesMixin, str, Enum):
    """Fine-grained capability tag checked before allowing an action."""

    # Dashboard & monitoring
    VIEW_DASHBOARD = "view_dashboard"
    VIEW_ANALYTICS = "view_analytics"
    VIEW_AUDIT_LOGS = "view_audit_logs"

    # User management
    MANAGE_USERS = "manage_users"
    VIEW_USERS = "view_users"
    BLOCK_USERS = "block_users"

    # Tenders
    CREATE_TENDER = "create_tender"
    VIEW_TENDER = "view_tender"
    EDIT_TENDER = "edit_tender"
    DELETE_TENDER = "delete_tender"
    PUBLISH_TENDER = "publish_tender"
    CLOSE_TENDER = "close_tender"

    # Offers
    SUBMIT_OFFER = "submit_offer"
    VIEW_OFFER = "view_offer"
    APPROVE_OFFER = "approve_offer"
    REJECT_OFFER = "reject_offer"
    EVALUATE_OFFER = "evaluate_offer"

    # Purchase orders
    CREATE_PURCHASE_ORDER = "create_purchase_order"
    VIEW_PURCHASE_ORDER = "view_purchase_order"
    MANAGE_INVOICES = "manage_invoices"

    # Reports & data
    VIEW_REPORTS = "view_reports"
    EXPORT_DATA = "export_data"

    # System settings
    MANAGE_SETTINGS = "manage_settings"
    MANAGE_BACKUP = "manage_backup"
    MANAGE_SUBSCRIPTIONS = "manage_subscriptions"
    SEND_NOTIFICATIONS = "send_notifications"

    # Security
    VIEW_SECURITY = "view_security"
    MANAGE_SECURITY = "manage_security"

from app.core.models.associations import child_activities, kindergarten_activity, kindergarten_groups
from app.core.models.activity import Activity
from app.core.models.bill import Bill
from app.core.models.child import Child
from app.core.models.group import Group
from app.core.models.kindergarten import Kindergarten
from app.core.models.kindergarten_account import KindergartenAccount
from app.core.models.mail_history import MailHistory
from app.core.models.parent import Parent
from app.core.models.user import User

__all__ = [
    "Activity",
    "Bill",
    "Child",
    "Group",
    "Kindergarten",
    "KindergartenAccount",
    "MailHistory",
    "Parent",
    "User",
    "child_activities",
    "kindergarten_activity",
    "kindergarten_groups",
]

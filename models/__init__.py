from models._base import db
from models.enquiry import DEFAULT_STATUS, ENQUIRY_STATUSES, Enquiry

__all__ = [
    "db",
    "Enquiry",
    "ENQUIRY_STATUSES",
    "DEFAULT_STATUS",
]

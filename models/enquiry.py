from datetime import datetime

from models._base import db

ENQUIRY_STATUSES = ("new", "contacted", "interested", "not_interested", "converted")
DEFAULT_STATUS = "new"


class Enquiry(db.Model):
    __tablename__ = "enquiries"
    # 삭제된 id 재사용 방지
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    uname = db.Column(db.String(100), nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    mobile = db.Column(db.String(30), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=DEFAULT_STATUS, index=True)
    contacted = db.Column(db.Boolean, nullable=False, default=False)
    followup_date = db.Column(db.Date)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)
    submission_datetime = db.Column(db.DateTime, default=datetime.now, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "uname": self.uname,
            "email": self.email,
            "mobile": self.mobile,
            "status": self.status,
            "contacted": bool(self.contacted),
            "followup_date": self.followup_date.isoformat() if self.followup_date else None,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "submission_datetime": (
                self.submission_datetime.isoformat() if self.submission_datetime else None
            ),
        }

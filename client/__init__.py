from client.admin_client import EnquiryAdminClient

__all__ = ["EnquiryAdminClient"]

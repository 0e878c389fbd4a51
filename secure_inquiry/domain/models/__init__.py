from secure_inquiry.domain.models.inquiry import InquiryResult, InquiryStatus

__all__ = ["InquiryResult", "InquiryStatus"]

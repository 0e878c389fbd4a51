from secure_inquiry.domain.schemas.inquiry import InquiryRequest, InquiryResponse

__all__ = ["InquiryRequest", "InquiryResponse"]

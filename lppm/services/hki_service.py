"""
HKI (intellectual property) service layer.
"""
from ..models.hki import HKI
from .record_service import RecordService


class HKIService(RecordService):
    model = HKI
    label = "HKI"
    search_fields = ("nomor_permohonan", "title")
    latest_first = True

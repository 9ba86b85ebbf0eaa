"""
Google Scholar publication service layer.
"""
from ..models.publication import GooglePublication
from .record_service import RecordService


class GooglePublicationService(RecordService):
    model = GooglePublication
    label = "Google publication"
    search_fields = ("title", "journal", "creators")

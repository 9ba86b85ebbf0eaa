"""
Book service layer.
"""
from ..models.book import Book
from .record_service import RecordService


class BookService(RecordService):
    model = Book
    label = "Book"
    search_fields = ("title", "creators")
    latest_first = True

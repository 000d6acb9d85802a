from typing import Any, Dict, Optional

from fastapi import status


class CatalogException(Exception):
    """Base exception for every catalog error handed to the error page."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "internal_error"
    message: str = "Internal server error"
    details: Optional[Dict[str, Any]] = None

    def __init__(
        self, message: str = None, status_code: int = None, error_code: str = None, details: Dict[str, Any] = None
    ):
        if message:
            self.message = message
        if status_code:
            self.status_code = status_code
        if error_code:
            self.error_code = error_code
        if details:
            self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception into a template/JSON friendly dict."""
        response = {"error_code": self.error_code, "message": self.message}
        if self.details:
            response["details"] = self.details
        return response

    def __str__(self) -> str:
        result = f"{self.error_code}: {self.message}"
        if self.details:
            result += f" (Details: {self.details})"
        return result


class AuthorNotFoundException(CatalogException):
    """Author not found"""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "author_not_found"
    message = "Author Not Found!"


class GenreNotFoundException(CatalogException):
    """Genre not found"""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "genre_not_found"
    message = "Genre Not Found!"


class DatabaseException(CatalogException):
    """Store failure"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "database_error"
    message = "Database error"

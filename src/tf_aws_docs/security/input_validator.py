"""
Input validation for tool arguments.
"""

from .exceptions import ValidationError


class InputValidator:
    """
    Validates free-text names and file names passed to documentation tools.

    File names end up in filesystem paths and repository paths, so anything
    that could escape the documentation directory is rejected.
    """

    MAX_QUERY_LENGTH = 500
    MAX_FILE_NAME_LENGTH = 255

    @staticmethod
    def validate_query(query: str, field_name: str = "Query") -> str:
        """
        Validate a free-text resolution query.

        :param query: Name or description supplied by the caller
        :param field_name: Name of the field for error messages
        :return: Query with surrounding whitespace and NUL bytes removed
        :raises ValidationError: If query is empty or too long
        """
        if not isinstance(query, str):
            raise ValidationError(f"{field_name} must be a string")

        cleaned = query.replace("\x00", "").strip()
        if not cleaned:
            raise ValidationError(f"{field_name} must be a non-empty string")

        if len(cleaned) > InputValidator.MAX_QUERY_LENGTH:
            raise ValidationError(
                f"{field_name} exceeds maximum length of {InputValidator.MAX_QUERY_LENGTH} characters"
            )

        return cleaned

    @staticmethod
    def validate_file_name(file_name: str) -> str:
        """
        Validate a documentation file name.

        :param file_name: File name such as "s3_bucket.html.markdown"
        :return: Validated file name
        :raises ValidationError: If empty, too long, or containing path components
        """
        if not isinstance(file_name, str):
            raise ValidationError("File name must be a string")

        cleaned = file_name.strip()
        if not cleaned:
            raise ValidationError("File name must be a non-empty string")

        if len(cleaned) > InputValidator.MAX_FILE_NAME_LENGTH:
            raise ValidationError(
                f"File name exceeds maximum length of {InputValidator.MAX_FILE_NAME_LENGTH} characters"
            )

        if "/" in cleaned or "\\" in cleaned or ".." in cleaned or "\x00" in cleaned:
            raise ValidationError(f"File name must not contain path components: '{cleaned}'")

        return cleaned

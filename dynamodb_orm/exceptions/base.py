from typing import Any, Dict, Optional


class DynamoORMError(Exception):
    """Root of every exception raised by dynamodb_orm.

    ``context`` holds structured details (entity, attribute, table, key...)
    and is appended to the message when the error is printed. Errors mapped
    from botocore keep the ClientError as ``original_error``.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, original_error={self.original_error!r}, context={self.context!r})"

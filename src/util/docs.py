# src/util/docs.py
from typing import Type
from core.exception.exceptions import BaseCustomException, GlobalErrorResponse


# builds the Swagger `responses=` mapping from exception classes
def create_error_response(*exception_classes: Type[BaseCustomException]):
    responses = {}

    for exc_class in exception_classes:
        exc = exc_class()

        status_code = exc.status_code

        if status_code not in responses:
            responses[status_code] = {
                "model": GlobalErrorResponse,
                "content": {"application/json": {"examples": {}}},
            }

        responses[status_code]["content"]["application/json"]["examples"][exc_class.__name__] = {
            "summary": exc.detail,
            "value": {
                "status_code": status_code,
                "code": exc.code,
                "error": exc.detail,
            },
        }

    return responses

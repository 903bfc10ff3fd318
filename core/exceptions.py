# app/core/exceptions.py
from typing import Optional, Any
from .constants import ResponseCode

class ApiException(Exception):
    def __init__(self, response_code: ResponseCode, data: Optional[Any] = None, message: Optional[str] = None):
        self.code = response_code.code
        # 필드 이름 등 상황에 맞는 메시지로 덮어쓸 수 있습니다.
        self.message = message or response_code.message
        self.data = data
        super().__init__(self.message)

class ValidationException(ApiException):
    pass

class NotFoundException(ApiException):
    pass

class BackendException(ApiException):
    pass

class AuthenticationException(ApiException):
    pass

class AuthorizationException(ApiException):
    pass

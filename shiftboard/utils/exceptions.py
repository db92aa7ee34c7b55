"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns
and for the attendance/shift-generation domain errors. Services raise these
directly; routers never catch them.

Error kinds:
    - NotFoundError: 참조 대상 없음 (Referenced record does not exist)
    - InvalidStateError: 상태 전이 불가 (AlreadyClockedIn, AlreadyClockedOut,
      BreakAlreadyActive, NoActiveBreak)
    - InvalidGenerationResultError: 외부 생성기 응답 형식 오류
      (Malformed output from the external shift generator)
    - StoreFailureError: 저장소 작업 실패 (Underlying persistence failure)

Usage:
    from shiftboard.utils.exceptions import NotFoundError, AlreadyClockedInError
    raise NotFoundError("Attendance not found")
    raise AlreadyClockedInError()
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (attendance, shift, preference, store, ...) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when attempting to create a resource that violates a uniqueness rule.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    403 Forbidden exception.
    Raised when the authenticated user lacks the required role
    (e.g. an employee calling admin-only endpoints).

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# === 근태 상태 전이 예외 (Attendance state transition errors) ===


class InvalidStateError(HTTPException):
    """409 Conflict 예외 — 현재 상태에서 허용되지 않는 동작.

    409 Conflict exception for operations the current attendance state does not allow.
    Subclasses carry the specific state error kind.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Invalid state for this operation") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class AlreadyClockedInError(InvalidStateError):
    """같은 날짜에 이미 출근 기록이 있음 (Attendance already exists for this employee-day)."""

    def __init__(self, detail: str = "이미 오늘 출근 기록이 있습니다 (User already clocked in for today)") -> None:
        super().__init__(detail)


class AlreadyClockedOutError(InvalidStateError):
    """이미 퇴근 처리됨 (Clock-out already recorded)."""

    def __init__(self, detail: str = "이미 퇴근 처리되었습니다 (User already clocked out)") -> None:
        super().__init__(detail)


class BreakAlreadyActiveError(InvalidStateError):
    """진행 중인 휴식이 이미 있음 (An open break already exists)."""

    def __init__(self, detail: str = "이미 휴식 중입니다 (User already on break)") -> None:
        super().__init__(detail)


class NoActiveBreakError(InvalidStateError):
    """진행 중인 휴식이 없음 (No open break to end)."""

    def __init__(self, detail: str = "진행 중인 휴식이 없습니다 (No active break found)") -> None:
        super().__init__(detail)


# === 외부 연동 예외 (External collaborator errors) ===


class InvalidGenerationResultError(HTTPException):
    """502 Bad Gateway 예외 — 시프트 생성기가 잘못된 응답을 반환.

    502 Bad Gateway exception.
    Raised when the external shift generator returns output that does not
    contain a well-formed list of shift assignments, or cannot be reached.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Invalid response format from shift generator") -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class StoreFailureError(HTTPException):
    """503 Service Unavailable 예외 — 저장소 작업 실패.

    503 Service Unavailable exception.
    Raised (via the application exception handler) when an underlying
    database operation fails. Never retried.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Storage operation failed") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)

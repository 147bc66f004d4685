class RegistrationError(Exception):
    """Base for failures shown to the user as a single message."""

    message = "오류가 발생했습니다."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def user_message(self) -> str:
        return str(self)

class AuthError(RegistrationError):
    message = "인증 실패"

class SaveError(RegistrationError):
    message = "저장 실패"

class LoadError(RegistrationError):
    message = "불러오기 실패"

class EmptySubmissionError(RegistrationError):
    message = "입력된 데이터가 없습니다."

class ConfigError(Exception):
    pass

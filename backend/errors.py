class AnalyzeError(Exception):
    """요청 경계에서 {"error": message} 응답으로 바뀌는 예외의 공통 부모"""

    status_code = 500
    message = "Request failed"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


class NoImageProvided(AnalyzeError):
    status_code = 400
    message = "No image provided"


class ExternalCallFailed(AnalyzeError):
    status_code = 502
    message = "Failed to analyze image"


class UnparsableModelOutput(AnalyzeError):
    status_code = 502
    message = "Failed to parse JSON content"


class NotFood(AnalyzeError):
    status_code = 422
    message = "Not recognized as food"


class PersistenceFailed(AnalyzeError):
    status_code = 500
    message = "Storage failure"


class IndexOutOfRange(AnalyzeError):
    status_code = 404
    message = "Entry not found"

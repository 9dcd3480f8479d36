"""Project-wide custom exception types."""


class SurveyAnalyticsError(RuntimeError):
    """Base class for failures surfaced to callers of the analysis pipeline."""


class InputError(SurveyAnalyticsError):
    """Raised when there is no response data to analyze.

    Covers a missing or unreadable CSV file and a file without data rows.
    """


class RenderError(SurveyAnalyticsError):
    """Raised when the report document cannot be written to its destination.

    ``result`` carries the already computed analysis when the pipeline has
    one, so callers can still serve the statistics.
    """

    def __init__(self, message: str, result=None) -> None:
        super().__init__(message)
        self.result = result


class PartialDataWarning(UserWarning):
    """A malformed row field that was skipped during aggregation.

    Instances are collected on the analysis result rather than raised.
    """

    def __init__(self, message: str, *, department: str, question_number: int):
        super().__init__(message)
        self.department = department
        self.question_number = question_number

    def to_dict(self):
        return {
            "message": str(self),
            "department": self.department,
            "question_number": self.question_number,
        }

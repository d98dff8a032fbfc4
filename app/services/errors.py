"""
app/services/errors.py — Error kinds raised by the assessment pipeline.

  - SubmissionValidationError → a required field is missing (client error)
  - PersistenceError          → the assessment could not be stored (server error)
  - NotificationError         → the results email could not be delivered
                                (logged only, never reported to the caller)
"""


class AssessmentError(Exception):
    """Base class for all assessment pipeline errors."""


class SubmissionValidationError(AssessmentError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class PersistenceError(AssessmentError):
    pass


class NotificationError(AssessmentError):
    pass

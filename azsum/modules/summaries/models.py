from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictStr

VALIDATION_ERROR_MESSAGE = 'Request must include a string "text" field.'
SUMMARIZATION_ERROR_MESSAGE = 'Summarization failed.'
CANCELLED_ERROR_MESSAGE = 'Summarization cancelled.'


class SummaryPayload(BaseModel):
    text: StrictStr = Field(min_length=1)

    model_config = {
        'json_schema_extra': {
            'examples': [
                {
                    'text': 'Your text here',
                }
            ]
        }
    }


class SummaryResult(BaseModel):
    summary: str


class ErrorResult(BaseModel):
    error: str
    details: Optional[Any] = None


# https://learn.microsoft.com/en-us/rest/api/language/analyze-text/job-status
class JobStatus(Enum):
    NOT_STARTED = 'notStarted'
    RUNNING = 'running'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'
    CANCELLING = 'cancelling'
    CANCELLED = 'cancelled'
    PARTIALLY_COMPLETED = 'partiallyCompleted'


class TaskKind(Enum):
    EXTRACTIVE_SUMMARIZATION = 'ExtractiveSummarization'

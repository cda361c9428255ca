import pytest
from multidict import CIMultiDict, CIMultiDictProxy

from azsum.env import AzureLanguageConfig
from azsum.http_client import HttpResponse

TRACKING_URL = (
    'https://example.cognitiveservices.azure.com/language/analyze-text/jobs/1234?api-version=2023-04-15-preview'
)


def make_response(data=None, status=200, headers=None) -> HttpResponse:
    return HttpResponse(status=status, headers=CIMultiDictProxy(CIMultiDict(headers or {})), data=data)


def job_response(status, documents=None) -> HttpResponse:
    job = {'jobId': '1234', 'status': status, 'tasks': {'completed': 0, 'failed': 0, 'total': 1, 'items': []}}

    if documents is not None:
        job['tasks']['items'] = [
            {'kind': 'ExtractiveSummarizationLROResults', 'status': status, 'results': {'documents': documents}}
        ]

    return make_response(job)


def summary_documents(*sentences) -> list:
    return [
        {
            'id': '1',
            'sentences': [
                {'text': text, 'rankScore': 1.0, 'offset': 0, 'length': len(text)} for text in sentences
            ],
            'warnings': [],
        }
    ]


@pytest.fixture()
def config() -> AzureLanguageConfig:
    return AzureLanguageConfig(endpoint='https://example.cognitiveservices.azure.com', key='secret')


@pytest.fixture()
def client(mocker):
    client = mocker.AsyncMock()
    client.post.return_value = make_response(status=202, headers={'operation-location': TRACKING_URL})

    return client


@pytest.fixture()
def sleep(mocker):
    return mocker.patch('azsum.modules.summaries.poller.asyncio.sleep')

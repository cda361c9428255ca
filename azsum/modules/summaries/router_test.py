import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from .conftest import job_response, summary_documents
from .handler import Summarizer
from .router import router, summarize


@pytest.fixture()
def test_client(config, client):
    app = FastAPI()
    app.include_router(router)
    app.state.summarizer = Summarizer(config, client)

    return TestClient(app)


class TestSummarizeRoute:
    def test_success(self, test_client, client, sleep):
        '''Test that a valid request returns the summary.'''

        client.get.side_effect = [job_response('running'), job_response('succeeded', summary_documents('One.', 'Two.'))]

        response = test_client.post('/summarize', json={'text': 'Some long text.'})

        assert response.status_code == 200
        assert response.json() == {'summary': 'One. Two.'}
        client.post.assert_called_once()

    def test_missing_text(self, test_client, client):
        '''Test that a body without text gets the fixed 400 error.'''

        response = test_client.post('/summarize', json={'content': 'Some long text.'})

        assert response.status_code == 400
        assert response.json() == {'error': 'Request must include a string "text" field.'}
        client.post.assert_not_called()

    def test_non_string_text(self, test_client, client):
        '''Test that a non-string text gets the fixed 400 error.'''

        response = test_client.post('/summarize', json={'text': 123})

        assert response.status_code == 400
        client.post.assert_not_called()

    def test_invalid_json(self, test_client, client):
        '''Test that a body that is not json gets the fixed 400 error.'''

        response = test_client.post('/summarize', content=b'not json', headers={'Content-Type': 'application/json'})

        assert response.status_code == 400
        assert response.json() == {'error': 'Request must include a string "text" field.'}
        client.post.assert_not_called()

    def test_failed_job(self, test_client, client, sleep):
        '''Test that a failed job is answered with a 500.'''

        client.get.return_value = job_response('failed')

        response = test_client.post('/summarize', json={'text': 'Some long text.'})

        assert response.status_code == 500
        assert response.json()['error'] == 'Summarization failed.'


class TestCancelOnDisconnect:
    @pytest.mark.asyncio
    async def test_cancels_when_client_disconnects(self, mocker):
        '''Test that the summarization is cancelled once the client goes away.'''

        mocker.patch('azsum.modules.summaries.router.TIME_BETWEEN_DISCONNECT_CHECKS', 0)
        cancelled = asyncio.Event()

        async def handle(body):
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise

        request = mocker.Mock()
        request.json = mocker.AsyncMock(return_value={'text': 'Text.'})
        request.is_disconnected = mocker.AsyncMock(side_effect=[False, True])
        summarizer = mocker.Mock()
        summarizer.handle = handle

        response = await summarize(request, summarizer)

        assert response.status_code == 499
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_returns_handler_response(self, mocker):
        '''Test that the handler response is returned untouched while the client is connected.'''

        request = mocker.Mock()
        request.json = mocker.AsyncMock(return_value={'text': 'Text.'})
        request.is_disconnected = mocker.AsyncMock(return_value=False)
        summarizer = mocker.Mock()
        summarizer.handle = mocker.AsyncMock(return_value='response')

        assert await summarize(request, summarizer) == 'response'

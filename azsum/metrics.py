from azsum.modules.monitoring import instrumentator
from azsum.utils import create_app

metrics = create_app()


@metrics.get('/healthz')
def health():
    '''
    Health checking.
    '''

    return {'status': 'ok'}


instrumentator.expose(metrics)

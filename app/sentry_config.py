import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration
import logging
import os
from dotenv import load_dotenv

load_dotenv()
SENTRY_DSN = os.getenv('SENTRY_DSN')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(process)s %(levelname)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S %Z00",
)
LOGGER = logging.getLogger("book-mutation-sequence")
LOGGER.setLevel(LOG_LEVEL)

SERVICE = "book-mutation-sequence"

def init_sentry():
    if not SENTRY_DSN:
        LOGGER.debug("SENTRY_DSN not set, error reporting stays local")
        return False
    # error lines stay breadcrumbs; sentryLog._error captures the exception itself
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        traces_sample_rate=0,
        integrations=[LoggingIntegration(event_level=None)],
    )
    return True

class sentryLog(object):
    def __init__(self,
                 flow=None,
                 step=None,
                 func=None,
                 detail=None,
                 metadata=None,
                 status=None,
                 event_id=None):
        self.service = SERVICE
        self.flow = flow
        self.step = step
        self.func = func
        self.detail = detail
        self.metadata = metadata or {}
        self.status = status
        self.event_id = event_id

    def _line(self):
        return ("service:%s flow:%s step:%s func:%s status:%s detail:%s metadata:%s"
                % (self.service, self.flow, self.step, self.func, self.status,
                   self.detail, self.metadata))

    def _error(self, error=None):
        with sentry_sdk.new_scope() as scope:
            scope.set_tag("service", self.service)
            scope.set_tag("flow", self.flow)
            scope.set_tag("step", self.step)
            scope.set_tag("status", self.status)
            scope.set_tag("func", self.func)
            if error is not None:
                self.event_id = sentry_sdk.capture_exception(error)
            LOGGER.error(self._line())
        return self.event_id

    def _info(self):
        LOGGER.info(self._line())

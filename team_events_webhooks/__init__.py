import logging
import os
import sys
import traceback

from celery import Celery
from flask import Flask
from flask_sslify import SSLify
import sentry_sdk
from sentry_sdk.integrations.celery import CeleryIntegration
from sentry_sdk.integrations.flask import FlaskIntegration
from werkzeug.middleware.proxy_fix import ProxyFix
from werkzeug.utils import import_string

__version__ = "0.1.0"

log_level = os.environ.get('LOGLEVEL', 'INFO').upper()
logger = logging.getLogger(__name__)
handler = logging.StreamHandler(sys.stderr)
handler.setLevel(log_level)
logger.addHandler(handler)
logger.setLevel(log_level)

# urllib3 is chatty on info-level, quiet it.
logging.getLogger("urllib3").setLevel("WARN")

celery = Celery(strict_typing=False)


def expand_config(name=None):
    if not name:
        name = "default"
    return "team_events_webhooks.config.{classname}Config".format(
        classname=name.capitalize(),
    )


def create_app(config=None, registry=None):
    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app)   # type: ignore[method-assign]
    config = config or os.environ.get("TEAM_EVENTS_CONFIG") or "default"
    config_obj = import_string(expand_config(config))()
    app.config.from_object(config_obj)

    create_celery_app(app)
    if not app.debug and not app.testing:
        SSLify(app)

    # The registry is built once, here, and only read afterwards.
    from .registry import build_registry
    app.extensions["team_events_registry"] = registry or build_registry()

    # attach our blueprints
    from .paths import URL_NAME
    from .views import team_events_bp
    app.register_blueprint(team_events_bp, url_prefix="/" + URL_NAME)
    from .tasks import tasks as tasks_blueprint
    app.register_blueprint(tasks_blueprint, url_prefix="/tasks")

    return app


def create_celery_app(app=None, config="worker"):
    """
    adapted from http://flask.pocoo.org/docs/0.10/patterns/celery/
    (added the wsgi_environ stuff)
    """
    if os.environ.get("SENTRY_DSN", ""):
        sentry_sdk.init(integrations=[CeleryIntegration(), FlaskIntegration()])

    app = app or create_app(config=config)
    celery.main = app.import_name
    celery.conf.update(app.config)
    class ContextTask(celery.Task): # type: ignore[name-defined]
        abstract = True
        def __call__(self, *args, **kwargs):
            if "wsgi_environ" in kwargs:
                wsgi_environ = kwargs.pop("wsgi_environ")
            else:
                wsgi_environ = None
            try:
                with app.app_context():
                    if wsgi_environ:
                        with app.request_context(wsgi_environ):
                            return self.run(*args, **kwargs)
                    else:
                        return self.run(*args, **kwargs)
            except Exception:
                # By default, celery will store an exception if it occurs,
                # but we don't want the exception object, we want a traceback.
                return traceback.format_exc()

    celery.Task = ContextTask
    return celery

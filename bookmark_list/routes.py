# routes.py
from datetime import datetime

from flask import Blueprint, Response, current_app, render_template, request, url_for
from werkzeug.exceptions import MethodNotAllowed

from .dispatcher import RequestContext, RequestParams, dispatch
from .models import DisplayPage

bp = Blueprint('bookmarks', __name__)

# Methods routed to the view; any other method on '/' arrives through the 405 handler
HANDLED_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']


def home_path():
    """Request path with the query string stripped."""
    return request.script_root + request.path


def init_routes(app):
    app.register_blueprint(bp)


def respond():
    params = RequestParams.from_mappings(request.method, request.args, request.form)
    ctx = RequestContext(method=request.method, params=params,
                         storage=current_app.storage, path=request.path)
    outcome = dispatch(ctx)

    if outcome.is_redirect:
        # Bare 302, no body
        return Response(status=302, headers={'Location': home_path()})

    if outcome.error is not None:
        current_app.logger.info(f"Rendering error page: {outcome.error.message}")

    return render_template(
        'index.html',
        page=outcome.page,
        error=outcome.error.message if outcome.error is not None else None,
        bookmarks=outcome.bookmarks,
        home=home_path(),
        now=datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        DisplayPage=DisplayPage,
    )


@bp.route('/', methods=HANDLED_METHODS)
def index():
    return respond()


@bp.app_errorhandler(MethodNotAllowed)
def method_not_allowed(e):
    if home_path() != url_for('bookmarks.index'):
        return e
    return respond()

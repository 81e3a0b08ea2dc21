# api.py
from http import HTTPStatus

from flask import Blueprint, current_app, request
from flask_restx import Api, Namespace, Resource, fields

from .dispatcher import RequestContext, RequestParams, dispatch
from .errors import ErrorKind

ns = Namespace('bookmarks', description='Bookmark operations', path='/')

ERROR_STATUS = {
    ErrorKind.MISSING_FIELD: HTTPStatus.BAD_REQUEST,
    ErrorKind.BIND_FAILED: HTTPStatus.BAD_REQUEST,
    ErrorKind.SCHEMA_ALREADY_EXISTS: HTTPStatus.CONFLICT,
}

bookmark_model = ns.model('Bookmark', {
    'id': fields.Integer(description='The bookmark ID'),
    'url': fields.String(description='The bookmark URL')
})

bookmark_input_model = ns.model('BookmarkInput', {
    'url': fields.String(required=True, description='The bookmark URL')
})

bookmarks_list_model = ns.model('BookmarksList', {
    'bookmarks': fields.List(fields.Nested(bookmark_model)),
    'error': fields.String(description='Error message, if the request failed')
})

status_model = ns.model('Status', {
    'success': fields.Boolean(description='Whether the operation was successful'),
    'error': fields.String(description='Error message, if the request failed')
})

install_model = ns.model('InstallStatus', {
    'installed': fields.Boolean(description='Whether the bookmarks table exists'),
    'error': fields.String(description='Error message, if the request failed')
})


def _dispatch(method, params):
    ctx = RequestContext(method=method, params=params,
                         storage=current_app.storage, path=request.path)
    return dispatch(ctx)


def _status_for(error):
    return ERROR_STATUS.get(error.kind, HTTPStatus.INTERNAL_SERVER_ERROR)


def _status_response(outcome, success_status):
    if outcome.error is not None:
        return {"success": False, "error": outcome.error.message}, _status_for(outcome.error)
    return {"success": True, "error": None}, success_status


@ns.route('/bookmarks')
class BookmarkList(Resource):
    @ns.marshal_with(bookmarks_list_model)
    def get(self):
        """List all bookmarks in insertion order"""
        outcome = _dispatch('GET', RequestParams())
        if outcome.error is not None:
            return {"bookmarks": [], "error": outcome.error.message}, _status_for(outcome.error)
        return {"bookmarks": [b.to_dict() for b in outcome.bookmarks], "error": None}

    @ns.expect(bookmark_input_model)
    @ns.marshal_with(status_model)
    def post(self):
        """Add a new bookmark"""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            # Arrays, scalars and unparsable bodies carry no url
            payload = {}
        outcome = _dispatch('POST', RequestParams(url=payload.get('url')))
        return _status_response(outcome, HTTPStatus.CREATED)


@ns.route('/bookmarks/<int:bookmark_id>')
@ns.param('bookmark_id', 'The bookmark ID')
class BookmarkItem(Resource):
    def delete(self, bookmark_id):
        """Delete a bookmark; deleting a missing ID succeeds"""
        outcome = _dispatch('POST', RequestParams(delete=True, id=str(bookmark_id)))
        if outcome.error is not None:
            current_app.logger.error(f"Error deleting bookmark {bookmark_id}: {outcome.error.message}")
            return {"success": False, "error": outcome.error.message}, _status_for(outcome.error)
        return '', HTTPStatus.NO_CONTENT


@ns.route('/install')
class Install(Resource):
    @ns.marshal_with(install_model)
    def get(self):
        """Report whether the bookmarks table exists"""
        outcome = _dispatch('GET', RequestParams(install_probe=True))
        if outcome.error is None:
            return {"installed": False, "error": None}
        if outcome.error.kind is ErrorKind.SCHEMA_ALREADY_EXISTS:
            return {"installed": True, "error": None}
        return {"installed": None, "error": outcome.error.message}, _status_for(outcome.error)

    @ns.marshal_with(status_model)
    def post(self):
        """Create the bookmarks table"""
        outcome = _dispatch('POST', RequestParams(install_commit=True))
        return _status_response(outcome, HTTPStatus.CREATED)


def init_api(app):
    blueprint = Blueprint('api', __name__, url_prefix='/api')
    api = Api(blueprint, version='1.0', title='Bookmark List API',
              description='A JSON API for a personal bookmark list', doc='/docs')
    api.add_namespace(ns)
    app.register_blueprint(blueprint)
    return api

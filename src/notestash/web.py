"""HTTP interface to a :class:`notestash.repos.base.Repo`, built with Flask.

Use :func:`create_app` to get the application.
"""

import logging
import os.path

from flask import Flask, Response, jsonify, request
from mako.template import Template
import yaml

from notestash.repos.base import Repo, AlreadyExists, InvalidContent, InvalidIdentifier, IOFailure, NotFound


logger = logging.getLogger(__name__)

RESOURCE_DIR = os.path.dirname(os.path.abspath(__file__))
UPLOAD_FORM_PATH = os.path.join(RESOURCE_DIR, 'templates', 'upload_form.html.mako')
OPENAPI_PATH = os.path.join(RESOURCE_DIR, 'openapi.yaml')

WELCOME = 'Welcome to the Note App! Go to /UploadForm.html to upload a note.'

ERROR_RESPONSES = {
    NotFound: (404, 'Note not found'),
    AlreadyExists: (400, 'Note already exists'),
    InvalidIdentifier: (400, 'Invalid note name'),
    InvalidContent: (400, 'Invalid note content'),
}


def _text(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype='text/plain')


def load_api_docs(server_url: str = None) -> dict:
    """Parses the bundled OpenAPI document, optionally pointing its ``servers`` list at server_url."""
    with open(OPENAPI_PATH, 'r', encoding='utf-8') as file:
        docs = yaml.safe_load(file)
    if server_url:
        docs['servers'] = [{'url': server_url}]
    return docs


def create_app(repo: Repo) -> Flask:
    """Returns a Flask application serving the notes in the given repo.

    The repo is stored in ``app.config['NOTESTASH_REPO']``. The application does no locking of its own;
    it relies on the repo being safe to call from concurrent request threads.
    """
    app = Flask(__name__)
    app.config['NOTESTASH_REPO'] = repo

    for error_type, (status, body) in ERROR_RESPONSES.items():
        def handle(e, status=status, body=body):
            logger.debug('%s for note %r: %s', type(e).__name__, e.name, e.message)
            return _text(body, status)
        app.register_error_handler(error_type, handle)

    @app.errorhandler(IOFailure)
    def handle_io_failure(e):
        logger.error('Storage failure for note %r: %s', e.name, e.message, exc_info=e)
        return _text('Storage failure', 500)

    @app.route('/')
    def index():
        return _text(WELCOME)

    @app.route('/UploadForm.html')
    def upload_form():
        template = Template(filename=UPLOAD_FORM_PATH)
        return Response(template.render(notes=repo.list()), mimetype='text/html')

    @app.route('/api-docs')
    def api_docs():
        return jsonify(load_api_docs(request.host_url.rstrip('/')))

    @app.route('/notes', methods=['GET'])
    def list_notes():
        return jsonify([note.as_json() for note in repo.list()])

    @app.route('/notes/<name>', methods=['GET'])
    def read_note(name):
        return _text(repo.read(name).text)

    @app.route('/notes/<name>', methods=['PUT'])
    def update_note(name):
        repo.update(name, request.get_data(as_text=True))
        return _text('Note updated')

    @app.route('/notes/<name>', methods=['DELETE'])
    def delete_note(name):
        repo.delete(name)
        return _text('Note deleted')

    @app.route('/write', methods=['POST'])
    def write_note():
        name = request.form.get('note_name')
        text = request.form.get('note')
        if not name or not text:
            return _text('Note name and content are required', 400)
        repo.create(name, text)
        return _text('Note created', 201)

    return app

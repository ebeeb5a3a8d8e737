import logging
import os

from flask import Flask, jsonify, render_template, request
from flask_cors import CORS
from flask_wtf.csrf import CSRFProtect

from app.config import get_config
from app.repositories import BookRepository, CategoryRepository
from app.services import BookService, CategoryService
from database_setup import check_connection, init_db, make_engine, make_session_factory


logger = logging.getLogger(__name__)

csrf = CSRFProtect()


def create_app(config=None):
    from app.routes.api import api_blueprint
    from app.routes.web import web_blueprint

    template_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'app', 'templates')
    app = Flask(__name__, template_folder=template_dir)
    app.config.from_object(config or get_config())

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s'
    )

    # Database
    engine = make_engine(app.config['DATABASE_URI'], echo=app.config['SQL_ECHO'])
    if not check_connection(engine, app.config['DB_CONNECT_ATTEMPTS'], app.config['DB_CONNECT_DELAY']):
        raise RuntimeError(f"Could not connect to the database at {engine.url!r}")
    init_db(engine)
    db_session = make_session_factory(engine)

    app.engine = engine
    app.db_session = db_session
    app.book_service = BookService(BookRepository(db_session))
    app.category_service = CategoryService(CategoryRepository(db_session))

    @app.teardown_appcontext
    def remove_session(exception=None):
        if exception is not None:
            db_session.rollback()
        db_session.remove()

    csrf.init_app(app)
    csrf.exempt(api_blueprint)
    app.register_blueprint(api_blueprint, url_prefix='/api')
    app.register_blueprint(web_blueprint)

    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith('/api/'):
            return jsonify({'success': False, 'error': 'Not Found', 'message': 'Resource not found'}), 404
        return render_template('errors/404.html', message='The requested page does not exist.'), 404

    for rule in app.url_map.iter_rules():
        logger.debug(f"{rule.endpoint}: {rule}")

    return app


if __name__ == '__main__':
    create_app().run(host='0.0.0.0', port=int(os.getenv('PORT', '5000')))

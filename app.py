"""
Faculty Marks Portal
Main Flask application entry point
"""

import logging

from flask import Flask, jsonify
from flask_wtf.csrf import CSRFProtect
from werkzeug.exceptions import HTTPException

from config import Config
from database import db, init_db

def configure_logging(level):
    """Root logging setup shared by the server and the portal client"""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

def create_app(config_class=Config):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app.config['LOG_LEVEL'])

    # Initialize extensions with app
    db.init_app(app)
    csrf = CSRFProtect(app)

    # Register blueprints
    from routes.auth import auth_bp
    from routes.faculty import faculty_bp, section_bp
    from routes.marks import marks_bp

    # Token-authenticated JSON API does not use CSRF cookies
    for blueprint in (auth_bp, faculty_bp, section_bp, marks_bp):
        csrf.exempt(blueprint)

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(faculty_bp, url_prefix='/api/faculty')
    app.register_blueprint(section_bp, url_prefix='/api/section')
    app.register_blueprint(marks_bp, url_prefix='/api/marks')

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description, 'data': [], 'code': error.code}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception("Unhandled error: %s", error)
        return jsonify({'message': 'Internal Server Error', 'data': [], 'code': 500}), 500

    @app.route('/health')
    def health_check():
        """Health check endpoint"""
        return jsonify({'status': 'healthy'})

    # Initialize database
    init_db(app)

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=8000, debug=True, use_reloader=False)

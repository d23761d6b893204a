from flask import Flask, send_from_directory, render_template, current_app
from config import Config
from models import db
import logging
import os
import requests

from homepage.client import StorefrontClient
from homepage.transport import IN_PROCESS_URL, in_process_session
from homepage.renderer import HomepageRenderer


def create_app(config_class=Config):
    """Application factory"""
    # Get the base directory (backend folder)
    base_dir = os.path.dirname(os.path.abspath(__file__))
    sections_dir = os.path.join(base_dir, 'home_sections')

    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_class)

    if not app.config.get('TESTING'):
        logging.basicConfig(level=logging.DEBUG if app.config.get('DEBUG') else logging.INFO)

    # Enable CORS for all domains on all routes
    from flask_cors import CORS
    CORS(app, resources={r"/*": {"origins": "*"}})

    # Initialize extensions
    db.init_app(app)

    # Register API blueprints
    from api import api
    app.register_blueprint(api)

    # Create tables
    with app.app_context():
        db.create_all()

    # Section fragment templates, fetched by the homepage renderer
    @app.route('/home-sections/<path:template_name>')
    def serve_section_template(template_name):
        """Serve homepage section templates"""
        return send_from_directory(sections_dir, template_name, mimetype='text/html')

    @app.route('/')
    def home():
        """Storefront homepage with its dynamic sections"""
        base_url = current_app.config.get('STOREFRONT_API_URL')
        if base_url:
            session = requests.Session()
        else:
            base_url = IN_PROCESS_URL
            session = in_process_session(current_app._get_current_object())

        with session:
            client = StorefrontClient(
                base_url,
                session=session,
                timeout=current_app.config['SECTION_FETCH_TIMEOUT']
            )
            report = HomepageRenderer(client, logger=current_app.logger).render()

        if report.failed:
            current_app.logger.error("Homepage sections could not be loaded; serving an empty section area")
        return render_template(
            'index.html',
            store_name=current_app.config.get('STORE_NAME', 'Store'),
            homepage_html=report.html
        )

    return app


if __name__ == '__main__':
    # Development server only
    app = create_app()
    host = os.environ.get('FLASK_HOST', '0.0.0.0')
    port = int(os.environ.get('FLASK_PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'True').lower() in ('true', '1', 'yes')
    app.run(debug=debug, host=host, port=port)

from flask import Flask
from models import db
from models.database import init_app as init_db
from routes import main_bp, events_bp
from utils.view import detail_region_id


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object('config')
    if test_config:
        app.config.update(test_config)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize database
    init_db(app)

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(events_bp, url_prefix='/api/events')

    app.add_template_global(detail_region_id)

    # Create tables
    with app.app_context():
        db.create_all()

    @app.after_request
    def add_header(response):
        """Add headers to prevent caching."""
        response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Expires'] = '0'
        return response

    return app


app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config['DEBUG'], port=5000)

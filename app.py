from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
import logging
import config
from errors import ServiceError
from extensions import mongo, mail, MongoJSONProvider

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_object(config)

# Initialize extensions
mongo.init_app(app)
mail.init_app(app)
app.json = MongoJSONProvider(app)

# Import blueprints after extensions
from routes.auth import auth_bp
from routes.quiz_routes import quiz_bp
from routes.education import education_bp
from routes.reporting import reporting_bp
from routes.admin import admin_bp

app.register_blueprint(auth_bp)
app.register_blueprint(quiz_bp)
app.register_blueprint(education_bp)
app.register_blueprint(reporting_bp)
app.register_blueprint(admin_bp)


@app.errorhandler(ServiceError)
def handle_service_error(exc):
    return jsonify(exc.to_dict()), exc.status_code


@app.errorhandler(HTTPException)
def handle_http_error(exc):
    return jsonify({"success": False, "message": exc.description, "errors": None}), exc.code


@app.errorhandler(Exception)
def handle_unexpected(exc):
    logger.exception("Unhandled error")
    return jsonify({"success": False, "message": "Server error", "errors": None}), 500


@app.route("/")
def home():
    return jsonify({"name": config.APP_NAME, "version": config.APP_VERSION})


@app.route("/healthz")
def healthz():
    try:
        mongo.db.command("ping")
    except Exception as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return jsonify({"status": "unavailable"}), 503
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    app.run(debug=True)

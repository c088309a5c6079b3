from flask import Flask, request, jsonify
from flask_cors import CORS
from commission_engine import CommissionNotApplicable, CommissionService, load_registry
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")
RATES_FILE = os.environ.get("COMMISSION_RATES_FILE")


def create_app(service=None):
    """Build the Flask app around a commission service."""
    if service is None:
        service = CommissionService(load_registry(RATES_FILE) if RATES_FILE else None)

    app = Flask(__name__)

    # Enable CORS for all routes (the admin console calls the API from the browser)
    CORS(app)

    @app.route("/api", methods=["GET"])
    def api_info():
        """API information endpoint"""
        return jsonify({
            "status": "ok",
            "message": "Commission Calculator API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "endpoints": {
                "calculate": "/calculate [POST]",
                "stats": "/stats [POST]",
                "configs": "/configs [GET]",
                "health": "/health [GET]"
            }
        }), 200

    @app.route("/health", methods=["GET"])
    def health():
        """Health check for monitoring"""
        return jsonify({"status": "healthy", "environment": ENVIRONMENT}), 200

    @app.route("/configs", methods=["GET"])
    def configs():
        """Active insurer rate configurations"""
        return jsonify(service.configs_to_dict()), 200

    @app.route("/calculate", methods=["POST"])
    def calculate():
        """
        Calculate commission for one sale
        """
        try:
            input_data = request.get_json(force=True, silent=True)

            if not input_data:
                return jsonify({
                    "error": "No input data provided",
                    "status": "failed"
                }), 400

            insurer = input_data.get("insurer", "Unknown") if isinstance(input_data, dict) else "Unknown"
            logger.info(f"Calculating commission for insurer: {insurer}")

            result = service.calculate_from_dict(input_data)

            logger.info(f"Commission calculated: {result['id']}")

            return jsonify(result), 200

        except CommissionNotApplicable as e:
            logger.info(f"Commission not applicable: {e.reason.value}")
            return jsonify({
                "error": "Commission cannot be calculated for these inputs",
                "reason": e.reason.value,
                "status": "not_applicable"
            }), 422

        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Validation error: {str(e)}")
            return jsonify({
                "error": str(e),
                "status": "validation_failed"
            }), 400

        except Exception as e:
            logger.error(f"Processing error: {str(e)}", exc_info=True)
            return jsonify({
                "error": "An unexpected error occurred during processing",
                "status": "failed"
            }), 500

    @app.route("/stats", methods=["POST"])
    def stats():
        """
        Aggregate stored calculation records
        """
        try:
            input_data = request.get_json(force=True, silent=True)

            if input_data is None:
                return jsonify({
                    "error": "No input data provided",
                    "status": "failed"
                }), 400

            return jsonify(service.stats_from_dict(input_data)), 200

        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Validation error: {str(e)}")
            return jsonify({
                "error": str(e),
                "status": "validation_failed"
            }), 400

        except Exception as e:
            logger.error(f"Processing error: {str(e)}", exc_info=True)
            return jsonify({
                "error": "An unexpected error occurred during processing",
                "status": "failed"
            }), 500

    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    create_app().run(host="0.0.0.0", port=port, debug=False)

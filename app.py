"""
Image Intensity API
Python/Flask backend using Pillow for image decoding.

Endpoints:
  POST /calculate-intensity     – Accept an image, return its average intensity.
  GET  /health                  – Liveness check.
  GET  /swagger-ui              – Interactive API documentation.
  GET  /api-docs/openapi.json   – OpenAPI document.
"""

import logging

from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.sansio.multipart import Data, Epilogue, Field, File, MultipartDecoder, NeedData

from api_docs import OPENAPI_DOCUMENT, OPENAPI_URL, SWAGGER_UI_HTML
from intensity import IntensityError, calculate_image_intensity

HOST = "0.0.0.0"
PORT = 3000

app = Flask(__name__)
CORS(app)

# Maximum allowed upload size (16 MB)
app.config["MAX_CONTENT_LENGTH"] = 16 * 1024 * 1024


def _read_part(body: bytes, boundary: bytes, name: str) -> bytes | None:
    """Return the undecoded content of the multipart part called *name*.

    Werkzeug decodes non-file parts to text, which corrupts binary data, so
    the body is walked with the low-level decoder instead.
    """
    decoder = MultipartDecoder(boundary)
    decoder.receive_data(body)
    decoder.receive_data(None)

    chunks = None
    while True:
        event = decoder.next_event()
        if isinstance(event, (Field, File)):
            if chunks is not None:
                break
            if event.name == name:
                chunks = []
        elif isinstance(event, Data):
            if chunks is not None:
                chunks.append(event.data)
        elif isinstance(event, (Epilogue, NeedData)):
            break

    return None if chunks is None else b"".join(chunks)


def _uploaded_image() -> bytes | None:
    """Return the raw content of the ``image`` part, or None if there is none.

    File parts and plain parts are treated the same; a malformed body counts
    as having no image.
    """
    boundary = request.mimetype_params.get("boundary")
    if request.mimetype != "multipart/form-data" or not boundary:
        return None

    try:
        return _read_part(request.get_data(), boundary.encode("ascii"), "image")
    except ValueError as exc:
        # UnicodeEncodeError is a ValueError too
        app.logger.info("Malformed multipart body: %s", exc)
        return None


@app.route("/calculate-intensity", methods=["POST"])
def calculate_intensity():
    """Accept a multipart upload with an ``image`` field and return the
    average per-pixel intensity as JSON."""

    data = _uploaded_image()
    if data is None:
        app.logger.info("Rejected upload without an 'image' field")
        return jsonify({"error": "No image provided"}), 400

    try:
        intensity = calculate_image_intensity(data)
    except IntensityError as exc:
        app.logger.info("Unprocessable image (%d bytes): %s", len(data), exc)
        return jsonify({"error": str(exc)}), 422

    return jsonify(
        {
            "average_intensity": intensity,
            "message": f"Average intensity calculated: {intensity:.2f}",
        }
    )


@app.route("/health", methods=["GET"])
def health():
    return Response("OK", mimetype="text/plain")


@app.route("/swagger-ui", methods=["GET"])
def swagger_ui():
    return Response(SWAGGER_UI_HTML, mimetype="text/html")


@app.route(OPENAPI_URL, methods=["GET"])
def openapi_json():
    return jsonify(OPENAPI_DOCUMENT)


@app.errorhandler(HTTPException)
def handle_http_error(exc: HTTPException):
    """Render HTTP errors (404, 405, 413, ...) as JSON instead of HTML."""
    return jsonify({"error": exc.description}), exc.code


@app.errorhandler(Exception)
def handle_unexpected_error(exc: Exception):
    app.logger.exception("Unhandled error while processing %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    print(f"Server running on http://localhost:{PORT}")
    print("POST /calculate-intensity - Upload an image to calculate average intensity")
    print("GET  /health - Health check endpoint")
    print("GET  /swagger-ui - Swagger documentation UI")
    app.run(debug=False, host=HOST, port=PORT)

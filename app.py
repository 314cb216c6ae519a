import base64
import binascii
import io
import logging

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS
from werkzeug.exceptions import InternalServerError
from werkzeug.utils import secure_filename

from config import Config
from container import dump_result, load_result
from errors import HuffmanError
from huffman import compression_stats, decode, encode

# -----------------------------------------------------------
# FLASK APP SETUP
# -----------------------------------------------------------
app = Flask(__name__)
app.config.from_object(Config)
app.config.from_prefixed_env("HUFFMAN")
CORS(app)

# -----------------------------------------------------------
# HELPER FUNCTIONS
# -----------------------------------------------------------
def bad_request(message):
    return jsonify({"success": False, "error": message}), 400


def allowed_file(filename, extensions):
    return "." in filename and filename.rsplit(".", 1)[-1].lower() in extensions


def encode_payload(text, result):
    """JSON body for an encoded result, with size statistics."""
    payload = {
        "success": True,
        "tree": result.serialized_tree,
        "padding_bits": result.padding_bits,
        "message": base64.b64encode(result.packed_bytes).decode("ascii"),
    }
    payload.update(compression_stats(text, result))
    return payload

# -----------------------------------------------------------
# ERROR HANDLERS
# -----------------------------------------------------------
@app.errorhandler(HuffmanError)
def handle_huffman_error(e):
    app.logger.warning("Huffman error: %s", e)
    return jsonify({"success": False, "error": str(e), "kind": type(e).__name__}), 400


@app.errorhandler(InternalServerError)
def handle_internal_error(e):
    # Flask has already logged the original exception
    return jsonify({"success": False, "error": "Internal Server Error"}), 500

# -----------------------------------------------------------
# TEXT API ROUTES
# -----------------------------------------------------------
@app.route("/api/sample")
def sample():
    """Round-trip the built-in sample paragraph and report the sizes."""
    text = app.config["SAMPLE_TEXT"]
    result = encode(text, filter=False)
    decoded = decode(result.packed_bytes, result.padding_bits, result.serialized_tree)

    body = {"success": True, "decoded": decoded, "matches": decoded == text}
    body.update(compression_stats(text, result))
    return jsonify(body)


@app.route("/api/encode", methods=["POST"])
def encode_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return bad_request("Expected a JSON object")

    text = data.get("text")
    if not isinstance(text, str):
        return bad_request("'text' must be a string")
    use_filter = data.get("filter", app.config["FILTER_INPUT"])
    if not isinstance(use_filter, bool):
        return bad_request("'filter' must be true or false")

    result = encode(text, filter=use_filter)
    return jsonify(encode_payload(text, result))


@app.route("/api/decode", methods=["POST"])
def decode_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return bad_request("Expected a JSON object")

    tree = data.get("tree")
    padding_bits = data.get("padding_bits")
    message = data.get("message")
    if not isinstance(tree, str):
        return bad_request("'tree' must be a string")
    # bool is an int subclass, reject it explicitly
    if not isinstance(padding_bits, int) or isinstance(padding_bits, bool):
        return bad_request("'padding_bits' must be an integer")
    if not isinstance(message, str):
        return bad_request("'message' must be a base64 string")

    try:
        packed = base64.b64decode(message, validate=True)
    except binascii.Error:
        return bad_request("'message' is not valid base64")

    text = decode(packed, padding_bits, tree)
    return jsonify({"success": True, "text": text})

# -----------------------------------------------------------
# FILE ROUTES
# -----------------------------------------------------------
@app.route("/compress_file", methods=["POST"])
def compress_file_route():
    file = request.files.get("file")
    if not file or not file.filename:
        return bad_request("No file uploaded")

    filename = secure_filename(file.filename)
    if not allowed_file(filename, app.config["ALLOWED_EXTENSIONS"]):
        return bad_request("Only TXT files allowed")

    try:
        text = file.read().decode("utf-8")
    except UnicodeDecodeError:
        return bad_request("File is not valid UTF-8 text")

    if "filter" in request.form:
        use_filter = request.form["filter"].lower() in ("1", "true", "yes")
    else:
        use_filter = app.config["FILTER_INPUT"]
    result = encode(text, filter=use_filter)
    stats = compression_stats(text, result)
    app.logger.info("Compressed %s: %d -> %d bytes",
                    filename, stats["original_size"], stats["compressed_size"])

    return send_file(
        io.BytesIO(dump_result(result)),
        as_attachment=True,
        download_name=f"{filename}.huff",
        mimetype="application/octet-stream",
    )


@app.route("/decompress_file", methods=["POST"])
def decompress_file_route():
    file = request.files.get("file")
    if not file or not file.filename:
        return bad_request("No file uploaded")

    filename = secure_filename(file.filename)
    if not filename.endswith(".huff"):
        return bad_request("Invalid file type")

    result = load_result(file.read())
    text = decode(result.packed_bytes, result.padding_bits, result.serialized_tree)

    base_name = filename[:-5]  # remove ".huff"
    if not base_name.lower().endswith(".txt"):
        base_name += ".txt"
    app.logger.info("Decompressed %s -> %s", filename, base_name)

    return send_file(
        io.BytesIO(text.encode("utf-8")),
        as_attachment=True,
        download_name=base_name,
        mimetype="text/plain",
    )

# -----------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True)

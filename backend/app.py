from flask import Flask, request, jsonify
from flask_cors import CORS
import translator


def token_to_dict(token):
    return {
        "type": token.type,
        "value": token.value,
        "lineno": token.lineno
    }


def create_app(config=None):
    app = Flask(__name__)
    app.config.update(
        MAX_TOKEN_LEN=translator.MAX_TOKEN_LEN,
        STRICT=False,
    )
    if config:
        app.config.update(config)
    CORS(app)  # allow cross-origin requests

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/compile", methods=["POST"])
    def compile_code():
        data = request.get_json(silent=True)
        if (not isinstance(data, dict)
                or not isinstance(data.get("code", ""), str)
                or not isinstance(data.get("strict", False), bool)):
            return jsonify({
                "tokens": [],
                "assembly": [],
                "errors": ["Request error: expected a JSON object with a string 'code' field and an optional boolean 'strict'"],
                "success": False
            }), 400

        code = data.get("code", "")
        strict = data.get("strict", app.config["STRICT"])
        try:
            result = translator.compile_source(
                code, strict=strict, max_len=app.config["MAX_TOKEN_LEN"])

            # EOF is an artifact of the scanner, not something the user wrote
            tokens = [token_to_dict(t) for t in result['tokens'] if t.type != 'EOF']

            return jsonify({
                "tokens": tokens,
                "assembly": result['asm'],
                "errors": result['errors'],
                "success": result['success']
            })
        except Exception as e:
            app.logger.exception("compile failed")
            return jsonify({
                "tokens": [],
                "assembly": [],
                "errors": [f"Unexpected error: {str(e)}"],
                "success": False
            }), 500

    return app


app = create_app()

if __name__ == "__main__":
    app.run(debug=True)

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from errors import ProxyError
from logging_setup import configure_logging, get_logger
from pipeline import MusicProxy
from settings import ProxyConfig, ServerSettings

logger = get_logger(__name__)


def create_app(config=None, log_level="INFO"):
    configure_logging(log_level)

    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.json.sort_keys = False
    app.json.mimetype = "application/json; charset=utf-8"
    CORS(app, send_wildcard=True)  # Access-Control-Allow-Origin: * everywhere

    proxy = MusicProxy(config or ProxyConfig.from_env())
    app.extensions["music_proxy"] = proxy

    def search_music():
        # Flask adds HEAD to every GET rule
        if request.method != "GET":
            raise MethodNotAllowed(valid_methods=["GET"])
        # first value wins for repeated keys
        inbound = request.args.to_dict(flat=True)
        return jsonify(proxy.search(inbound))

    app.add_url_rule("/", "search_root", search_music, methods=["GET"])
    app.add_url_rule("/api/music", "search_api", search_music, methods=["GET"])

    @app.errorhandler(ProxyError)
    def handle_proxy_error(e):
        logger.warning(
            "proxy_error",
            error=type(e).__name__,
            error_msg=e.message,
            upstream_status=getattr(e, "upstream_status", None),
        )
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        response = jsonify({"code": e.code, "error_msg": e.name})
        response.status_code = e.code
        if isinstance(e, MethodNotAllowed) and e.valid_methods:
            response.headers["Allow"] = ", ".join(e.valid_methods)
        return response

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("unhandled_error", path=request.path)
        return jsonify({"code": 500, "error_msg": f"Internal Server Error: {e}"}), 500

    return app


# local testing
if __name__ == "__main__":
    settings = ServerSettings.from_env()
    app = create_app(log_level=settings.log_level)
    app.run(host=settings.host, port=settings.port)

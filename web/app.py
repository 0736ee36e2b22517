"""Flask app serving the rug catalog browser API.

The browser client fetches collection, colour and design views from the
``/api`` blueprint; all grouping, filtering and sorting happens server side
in ``web.views``.
"""

from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, Response, jsonify

# Load environment variables from .env file (explicitly specify path)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from .api import api  # noqa: E402
from .catalog import get_catalog  # noqa: E402
from .config import FLASK_DEBUG, FLASK_HOST, FLASK_PORT  # noqa: E402

app = Flask(__name__)
app.register_blueprint(api)


# ---------- FLASK ROUTES ----------


@app.route("/health", methods=["GET"])
def health() -> Response:
    """Liveness plus the number of records currently loaded."""
    catalog = get_catalog()
    return jsonify(
        {
            "status": "ok" if catalog.ok else "degraded",
            "records": len(catalog.records),
        }
    )


def main() -> None:
    app.run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)


if __name__ == "__main__":
    main()

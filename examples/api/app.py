"""API — JSON endpoints declared by handler file headers.

Every file under ``routes/`` names its own route in its first lines::

    # @route /users/:id [GET]

Demonstrates path parameters with type conversion, method lists,
request.json() for POST, and an ``@auth`` rule checked against a bearer
token through ``get_request()``.

Run:
    cd examples/api && python app.py

Inspect the route table:
    fileroute routes app:create_app
"""

from pathlib import Path

from fileroute import App, RouterConfig, get_request

HERE = Path(__file__).parent

# rule token -> bearer token that satisfies it
TOKENS = {"admin": "letmein"}


def check_auth(rule: str) -> bool:
    expected = TOKENS.get(rule)
    if expected is None:
        return False
    return get_request().headers.get("authorization") == f"Bearer {expected}"


def create_app(cache_dir: Path = HERE / "cache") -> App:
    app = App(RouterConfig(handlers_dir=HERE / "routes", cache_dir=cache_dir, debug=True))
    app.set_auth_handler(check_auth)
    return app


app = create_app()

if __name__ == "__main__":
    app.run()

import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]
LATEST = PYTHON_VERSIONS[-1]

nox.options.sessions = ["tests", "tests_domain"]


def _install(session: nox.Session, *groups: str) -> None:
    """Install kamisori into the session virtualenv with the given extras."""
    session.run("poetry", "install", *(f"--extras={group}" for group in groups), external=True)
    # psycopg2 wheels are interpreter-specific; a cached build can be stale.
    session.run("pip", "install", "--force-reinstall", "--no-cache-dir", "psycopg2-binary")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Whole suite on the in-memory adapters."""
    _install(session, "test")
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Aggregates and value objects only."""
    _install(session, "test")
    session.run("pytest", "tests/ordering/domain/", *session.posargs)


@nox.session(python=LATEST)
def tests_api(session: nox.Session) -> None:
    """HTTP surface and the checkout/order-status scenarios."""
    _install(session, "test")
    session.run("pytest", "tests/ordering/integration/", "tests/ordering/bdd/", *session.posargs)


@nox.session(python=LATEST)
def tests_production(session: nox.Session) -> None:
    """Full suite against the Postgres, Redis and MessageDB services named in domain.toml."""
    _install(session, "test")
    session.run("pytest", "--env", "production", *session.posargs)


@nox.session(python=LATEST)
def loadtest(session: nox.Session) -> None:
    """Headless Locust run against a server on localhost:8000."""
    _install(session, "loadtest")
    session.run(
        "locust",
        "-f",
        "loadtests/locustfile.py",
        "--headless",
        "--host",
        "http://localhost:8000",
        "-u",
        "20",
        "-r",
        "5",
        "-t",
        "60s",
        *session.posargs,
    )

"""Best Save: price-driven off-period planner for controllable loads."""

try:
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("best-save")
except Exception:
    __version__ = "dev"

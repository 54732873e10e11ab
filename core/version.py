from importlib import metadata

try:
    __version__ = metadata.version("konut-kredi")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    from konut import __version__

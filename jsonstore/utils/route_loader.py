import importlib
import pkgutil
from typing import List

from flask_restx import Namespace, Api

from jsonstore.Logger.log_main import get_logger

logger = get_logger()

def load_routes(rest_api: Api, package: str = "jsonstore.routes") -> List[str]:
    """
    Import every module under `package` and register the Flask-RESTX Namespace it exports as `ns`.

    Modules are loaded in name order so route registration is deterministic;
    modules starting with an underscore are skipped.
    """
    pkg = importlib.import_module(package)
    registered = []

    for modinfo in sorted(pkgutil.iter_modules(pkg.__path__, pkg.__name__ + "."), key=lambda m: m.name):
        if modinfo.ispkg or modinfo.name.rsplit(".", 1)[-1].startswith("_"):
            continue

        module = importlib.import_module(modinfo.name)
        namespace = getattr(module, "ns", None)
        if isinstance(namespace, Namespace):
            rest_api.add_namespace(namespace)
            registered.append(namespace.name)

    logger.info("routes_loaded: %s", ", ".join(registered))
    return registered

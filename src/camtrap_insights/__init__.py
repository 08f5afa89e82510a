"""camtrap-insights - summary statistics and maps for camera trap data packages.

Architecture::

    schemas.py      Pydantic row models (deployments, observations, media, taxa)
    package.py      CamtrapPackage: validated in-memory tables
    predicates.py   Deployment filters (pred, pred_gte, pred_in, pred_and, ...)
    validation.py   Up-front argument checks
    analysis/       Accessors: species, effort, camera operation, counts, RAI,
                    record tables
    renderers/      Leaflet maps of deployment features (Jinja2 templates)
    config.py       Settings from CAMTRAP_* environment variables, logging setup

Data flow: records -> CamtrapPackage -> predicates -> analysis -> renderers

Extension points, see each package's docstring:
  - New accessor:  analysis/__init__.py
  - New renderer:  renderers/__init__.py
"""

__version__ = "0.1.0"

from camtrap_insights.analysis import (
    check_species,
    get_cam_op,
    get_dep_no_obs,
    get_effort,
    get_n_individuals,
    get_n_obs,
    get_n_species,
    get_rai,
    get_rai_individuals,
    get_record_table,
    get_scientific_name,
    get_species,
)
from camtrap_insights.config import Settings, configure_logging, get_settings
from camtrap_insights.errors import (
    CamtrapError,
    ConflictingArgumentWarning,
    InvalidArgumentError,
)
from camtrap_insights.package import CamtrapPackage, check_package
from camtrap_insights.predicates import (
    Predicate,
    apply_filter_predicate,
    pred,
    pred_and,
    pred_gt,
    pred_gte,
    pred_in,
    pred_lt,
    pred_lte,
    pred_na,
    pred_not,
    pred_notin,
    pred_notna,
    pred_or,
)
from camtrap_insights.renderers.deployment_map import DeploymentMap, map_dep

__all__ = [
    "CamtrapError",
    "CamtrapPackage",
    "ConflictingArgumentWarning",
    "DeploymentMap",
    "InvalidArgumentError",
    "Predicate",
    "Settings",
    "__version__",
    "apply_filter_predicate",
    "check_package",
    "check_species",
    "configure_logging",
    "get_cam_op",
    "get_dep_no_obs",
    "get_effort",
    "get_n_individuals",
    "get_n_obs",
    "get_n_species",
    "get_rai",
    "get_rai_individuals",
    "get_record_table",
    "get_scientific_name",
    "get_settings",
    "get_species",
    "map_dep",
    "pred",
    "pred_and",
    "pred_gt",
    "pred_gte",
    "pred_in",
    "pred_lt",
    "pred_lte",
    "pred_na",
    "pred_not",
    "pred_notin",
    "pred_notna",
    "pred_or",
]

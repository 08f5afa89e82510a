"""Accessor functions computing per-deployment statistics.

Every function takes a ``CamtrapPackage`` first, then any number of
deployment filter predicates, then keyword options. Each call is pure: the
package is never modified and a fresh DataFrame is returned.

Modules:
  - species: taxonomy table, vernacular -> scientific name resolution
  - effort: active duration of each deployment
  - camera_operation: station x date matrix of daily activity
  - counts: number of species, observations and individuals
  - rai: relative abundance index (counts normalized to 100 days)
  - record_table: independent detections per station and species

Dependency rule: analysis/ never renders anything. Renderers call these
functions and turn their tables into maps.

Adding an accessor
------------------
1. Create a function in the module it belongs to::

       def get_something(package: CamtrapPackage, *predicates: Predicate) -> pd.DataFrame:
           check_package(package)
           deployments = apply_filter_predicate(package.deployments, *predicates, verbose=True)
           ...

2. Validate categorical arguments with ``validation.check_value`` before
   touching the data.

3. Re-export it here and in the top-level ``__init__.py``, and add tests in
   ``tests/test_{module}.py``.
"""

from camtrap_insights.analysis.camera_operation import daily_coverage, get_cam_op
from camtrap_insights.analysis.counts import (
    get_dep_no_obs,
    get_n_individuals,
    get_n_obs,
    get_n_species,
)
from camtrap_insights.analysis.effort import get_effort
from camtrap_insights.analysis.rai import get_rai, get_rai_individuals
from camtrap_insights.analysis.record_table import get_record_table
from camtrap_insights.analysis.species import (
    check_species,
    get_scientific_name,
    get_species,
)

__all__ = [
    "check_species",
    "daily_coverage",
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
    "get_species",
]

"""Personal-productivity command-line tools.

- :mod:`personal_scripts.budget`: bank/credit-card CSV normalization
  (``transaction-parser``).
- :mod:`personal_scripts.workspace`: batch-update local git clones
  (``update-local-repos``).
- :mod:`personal_scripts.github`: GitHub contribution statistics
  (``contribution-stats``).
"""

__version__ = "0.1.0"

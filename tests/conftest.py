import pathlib
import sys

import matplotlib

matplotlib.use("Agg")

# Make main.py importable when the tests run from a source checkout
_PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

# flat layout: make perceptron.py and dataset_2d.py importable without installing
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import sys
from pathlib import Path

# allow running the suite from a plain checkout
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

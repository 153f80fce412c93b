"""pytest configuration: put src/ on sys.path so tests import rncrypt uninstalled."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

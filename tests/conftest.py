import os
import sys

_tests_dir = os.path.dirname(os.path.abspath(__file__))
_src_dir = os.path.abspath(os.path.join(_tests_dir, ".."))

# Permite ejecutar la suite desde el árbol de fuentes sin 'pip install -e .'
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

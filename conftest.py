# Make `import mediaframe` and `import api` work from a plain checkout.
import os
import sys

ROOT = os.path.dirname(__file__)
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

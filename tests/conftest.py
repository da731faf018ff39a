import os
import tempfile

# The API module opens its save file on import; keep it out of the checkout.
os.environ.setdefault("BOOKIE_SIM_DATA_DIR", tempfile.mkdtemp(prefix="bookie-sim-"))

import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# The app refuses to start without explicit origins
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")
# Keep the scoring endpoints from tripping the limiter across the suite
os.environ.setdefault("DISABLE_RATE_LIMITS", "true")

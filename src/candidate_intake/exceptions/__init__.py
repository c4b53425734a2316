# candidate_intake/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Domain errors (validation kinds, classified storage kinds)
# │   ├── storage_classifier.py      # Read signals from raw SQLAlchemy / ORM client errors
# │   └── translator.py              # Map raw storage errors to domain errors (or pass them through)

import os

# Database Configuration
# Uses default credentials for local Docker Compose setup
DB_URL = os.getenv("DATABASE_URL", "postgres://user:password@db:5432/foodorders_db")

# Application Metadata
PROJECT_NAME = "Food Delivery Order Service"
VERSION = "1.0.0"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Personnel tokens
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXP_MINUTES = int(os.getenv("JWT_EXP_MINUTES", 10))

# Order status policy: "permissive" (any -> any) or "strict" (forward-only lifecycle)
ORDER_TRANSITIONS = os.getenv("ORDER_TRANSITIONS", "permissive")

# Native id encoding of the persistence layer: 24 hex characters
OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"

# Largest quantity accepted for a single order line
MAX_ITEM_QUANTITY = int(os.getenv("MAX_ITEM_QUANTITY", 1000))

from dotenv import load_dotenv
import os

# Load environment variables from a .env file
load_dotenv()

# Retrieve parts of the database URL from environment variables
DB_USER = os.getenv("DB_USERNAME", "root")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_HOST = os.getenv("DB_HOST", "127.0.0.1")
DB_PORT = os.getenv("DB_PORT", "3306")
DB_NAME = os.getenv("DB_NAME", "vehicle_intake")

# Object storage configuration (any S3-compatible store)
S3_BUCKET_NAME = os.getenv("S3_BUCKET_NAME", "vehicle-uploads")
AWS_ACCESS_KEY = os.getenv("AWS_ACCESS_KEY")
AWS_SECRET_KEY = os.getenv("AWS_SECRET_KEY")
S3_REGION = os.getenv("S3_REGION")
S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Upload limits
MAX_FILES = 100
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB per file

# Build the database URL unless one is given outright
DATABASE_URL = os.getenv("DATABASE_URL") or f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"

REQUIRED_SETTINGS = ("AWS_ACCESS_KEY", "AWS_SECRET_KEY")


def validate_config():
    missing = [name for name in REQUIRED_SETTINGS if not globals().get(name)]
    if missing:
        raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")

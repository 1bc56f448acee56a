from dotenv import load_dotenv
import os

load_dotenv()


class Settings:
    # ===== Extraction service =====
    EXTRACTION_ENDPOINT = os.getenv("EXTRACTION_ENDPOINT", "")

    # ===== Logging =====
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE", "kggen.log")


settings = Settings()

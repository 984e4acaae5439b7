"""Application configuration."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Application configuration loaded from environment variables."""
    
    # Backend REST API
    api_base_url: str = os.getenv("API_BASE_URL", "http://localhost:5000/api")
    api_token: str = os.getenv("API_TOKEN", "")
    api_timeout_seconds: float = float(os.getenv("API_TIMEOUT_SECONDS", "15"))
    
    # Display
    display_timezone: str = os.getenv("DISPLAY_TIMEZONE", "Asia/Kolkata")
    
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()

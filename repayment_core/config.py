"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class RepaymentConfig(BaseSettings):
    """Repayment core configuration"""
    
    # Default lending policy (Decimal values as strings)
    interest_rate: str = "0.10"  # Monthly rate, 10%
    max_tenure: int = 12  # Advisory cap in months
    salary_cap_multiplier: str = "3"  # Total repayment <= 3 x monthly salary
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stdout
    
    model_config = SettingsConfigDict(
        env_prefix="REPAYMENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )


# Global configuration instance
config = RepaymentConfig()


def get_config() -> RepaymentConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> RepaymentConfig:
    """Reload configuration from environment"""
    global config
    config = RepaymentConfig()
    return config

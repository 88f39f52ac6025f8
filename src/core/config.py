import os
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv


# ==========================================================
# 1) Cargar .env raíz
# ==========================================================
load_dotenv(".env")
DEPLOY_ENV = os.getenv("DEPLOY_ENV", "prod").lower()

# ==========================================================
# 2) Cargar .env del entorno
# ==========================================================
ENV_PATH = f"DevOps/{DEPLOY_ENV}/.env"
load_dotenv(ENV_PATH, override=True)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        extra="allow"
    )

    # =========================
    #  App
    # =========================
    deploy_env: str = Field("prod")
    app_name: str = Field("plate-ocr-pipeline")
    app_env: str = Field("prod")
    app_port: int = Field(8000)
    log_level: str = Field("INFO")

    # =========================
    #  OCR engine
    # =========================
    ocr_engine: str = Field("easyocr")   # easyocr | synthetic
    ocr_lang: str = Field("en")
    ocr_gpu: bool = Field(False)

    # =========================
    #  Preprocesamiento
    # =========================
    general_target_width: int = Field(1024)
    general_quality: int = Field(80)
    high_fidelity: bool = Field(False)
    high_fidelity_quality: int = Field(95)
    cropped_target_width: int = Field(800)
    cropped_target_height: int = Field(360)
    cropped_quality: int = Field(95)
    preprocess_output_dir: Optional[str] = Field(None)

    # =========================
    #  Scoring
    # =========================
    loose_tier_multiplier: float = Field(0.7)
    cropped_confidence_bonus: float = Field(1.2)
    cropped_brevity_threshold: int = Field(20)

    # =========================
    #  Pipeline
    # =========================
    detect_workers: int = Field(4)

    # =========================
    #  Motor sintético (pruebas)
    # =========================
    synthetic_plates: List[str] = Field(default_factory=lambda: ["ABC-123", "XYZ-789", "DEF-456"])
    synthetic_seed: Optional[int] = Field(None)

    # =========================
    #  Monitoring
    # =========================
    prometheus_port: int = Field(9100)


settings = Settings()

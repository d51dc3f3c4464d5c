"""
Application configuration for the sensor anomaly detector.

Provides environment-aware settings with conservative defaults. Model
hyperparameters (window size, sequence length, threshold, scaler) are not
settings: they ship with each trained model and are loaded through
src.anomaly.loader.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChannelAssets(BaseModel):
	"""
	Asset locations for one sensor channel.

	Notes:
	- config_path: JSON document with the model hyperparameters and scaler.
	- model_path: serialized TorchScript autoencoder.
	"""

	config_path: Optional[Path] = Field(None, description="Model config JSON")
	model_path: Optional[Path] = Field(None, description="TorchScript model file")


class EngineSettings(BaseModel):
	"""
	Inference engine settings.

	Rationale:
	- Inference runs on CPU by default; on-device targets rarely have a GPU.
	- num_threads bounds intra-op parallelism so the sample feed stays responsive.
	"""

	device: str = Field("cpu", description="torch device for inference")
	num_threads: int = Field(1, ge=1, description="torch intra-op threads")


class Config(BaseSettings):
	"""
	Global configuration with environment overrides.
	"""

	model_config = SettingsConfigDict(
		env_prefix="SENSOR_", env_file=".env", env_nested_delimiter="__", extra="ignore"
	)

	log_level: str = Field("INFO", description="Default logging level")
	logs_dir: Path = Field(Path("logs"), description="Directory for log files")

	# Windowed mean/std model; loaded strictly, no defaults
	accelerometer: ChannelAssets = ChannelAssets(
		config_path=Path("assets/model_config.json"),
		model_path=Path("assets/sensor_anomaly_model.pt"),
	)
	# Raw xyz model; may run on built-in defaults
	movement: ChannelAssets = ChannelAssets(
		config_path=Path("assets/movement_config.json"),
		model_path=Path("assets/movement_model.pt"),
	)
	keystrokes: ChannelAssets = ChannelAssets(
		config_path=Path("assets/typing_config.json"),
		model_path=Path("assets/typing_model.pt"),
	)

	# Milliseconds mapped to 1.0 when normalising keystroke latencies
	keystroke_latency_divisor: float = Field(2000.0, gt=0.0)

	engine: EngineSettings = EngineSettings()

	def model_post_init(self, __context: object) -> None:
		self.logs_dir.mkdir(parents=True, exist_ok=True)


config = Config()

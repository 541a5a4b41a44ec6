"""Model loading and inference for {{ projectName }} ({{ framework }}, {{ modelFormat }})."""

import logging
import os

import numpy as np

logger = logging.getLogger(__name__)

MODEL_DIR = os.environ.get("SM_MODEL_DIR", "/opt/ml/model")
{% if framework == 'sklearn' %}
{% if modelFormat == 'pkl' %}
MODEL_FILE = "model.pkl"


def _load(path):
    import pickle

    with open(path, "rb") as f:
        return pickle.load(f)
{% else %}
MODEL_FILE = "model.joblib"


def _load(path):
    import joblib

    return joblib.load(path)
{% endif %}


def _predict(model, features):
    return model.predict(features)
{% elif framework == 'xgboost' %}
MODEL_FILE = "model.{{ modelFormat }}"


def _load(path):
    import xgboost as xgb

    booster = xgb.Booster()
    booster.load_model(path)
    return booster


def _predict(model, features):
    import xgboost as xgb

    return model.predict(xgb.DMatrix(features))
{% elif framework == 'tensorflow' %}
{% if modelFormat == 'SavedModel' %}
MODEL_FILE = "saved_model"
{% else %}
MODEL_FILE = "model.{{ modelFormat }}"
{% endif %}


def _load(path):
    import tensorflow as tf

    return tf.keras.models.load_model(path)


def _predict(model, features):
    return model.predict(features, verbose=0)
{% endif %}


class ModelHandler:
    """Loads the model once and turns JSON payloads into predictions."""

    def __init__(self, model_dir=MODEL_DIR):
        self.model_path = os.path.join(model_dir, MODEL_FILE)
        self._model = None

    @property
    def model(self):
        if self._model is None:
            logger.info("Loading model from %s", self.model_path)
            self._model = _load(self.model_path)
        return self._model

    def ready(self):
        try:
            return self.model is not None
        except Exception:
            logger.exception("Model failed to load")
            return False

    def predict(self, payload):
        """``{"instances": [[...], ...]}`` → ``{"predictions": [...]}``."""
        instances = payload.get("instances")
        if instances is None:
            raise ValueError("Request body must contain 'instances'")
        features = np.asarray(instances, dtype=np.float32)
        predictions = _predict(self.model, features)
        return {"predictions": np.asarray(predictions).tolist()}

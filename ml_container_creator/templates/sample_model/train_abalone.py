"""Train a sample {{ framework }} Abalone classifier for {{ projectName }}.

Writes the model in the {{ modelFormat }} format the serving code expects:

    python sample_model/train_abalone.py --output-dir ./model
"""

import argparse
import os

import numpy as np
import pandas as pd

DATA_URL = "https://archive.ics.uci.edu/ml/machine-learning-databases/abalone/abalone.data"
COLUMNS = [
    "sex", "length", "diameter", "height", "whole_weight",
    "shucked_weight", "viscera_weight", "shell_weight", "rings",
]


def load_dataset():
    df = pd.read_csv(DATA_URL, header=None, names=COLUMNS)
    df["sex"] = df["sex"].map({"M": 0, "F": 1, "I": 2})
    features = df.drop(columns=["rings"]).to_numpy(dtype=np.float32)
    # Three age bands: young (<9 rings), adult (9-11), old (>11)
    labels = np.digitize(df["rings"].to_numpy(), bins=[9, 12])
    return features, labels


def train(features, labels, output_dir):
{% if framework == 'sklearn' %}
    from sklearn.ensemble import RandomForestClassifier

    model = RandomForestClassifier(n_estimators=100, random_state=42)
    model.fit(features, labels)
{% if modelFormat == 'pkl' %}
    import pickle

    path = os.path.join(output_dir, "model.pkl")
    with open(path, "wb") as f:
        pickle.dump(model, f)
{% else %}
    import joblib

    path = os.path.join(output_dir, "model.joblib")
    joblib.dump(model, path)
{% endif %}
{% elif framework == 'xgboost' %}
    import xgboost as xgb

    dtrain = xgb.DMatrix(features, label=labels)
    params = {"objective": "multi:softmax", "num_class": 3, "max_depth": 5}
    booster = xgb.train(params, dtrain, num_boost_round=50)
    path = os.path.join(output_dir, "model.{{ modelFormat }}")
    booster.save_model(path)
{% elif framework == 'tensorflow' %}
    import tensorflow as tf

    model = tf.keras.Sequential([
        tf.keras.layers.Input(shape=(features.shape[1],)),
        tf.keras.layers.Dense(64, activation="relu"),
        tf.keras.layers.Dense(3, activation="softmax"),
    ])
    model.compile(optimizer="adam", loss="sparse_categorical_crossentropy", metrics=["accuracy"])
    model.fit(features, labels, epochs=20, batch_size=32, verbose=0)
{% if modelFormat == 'SavedModel' %}
    path = os.path.join(output_dir, "saved_model")
    model.export(path)
{% else %}
    path = os.path.join(output_dir, "model.{{ modelFormat }}")
    model.save(path)
{% endif %}
{% endif %}
    return path


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--output-dir", default="model")
    args = parser.parse_args()

    os.makedirs(args.output_dir, exist_ok=True)
    features, labels = load_dataset()
    path = train(features, labels, args.output_dir)
    print(f"Saved model to {path}")


if __name__ == "__main__":
    main()

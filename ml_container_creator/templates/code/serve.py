"""{{ modelServer }} application exposing the SageMaker /ping and /invocations routes."""

import logging

from model_handler import ModelHandler

logging.basicConfig(level=logging.INFO)

handler = ModelHandler()
{% if modelServer == 'flask' %}

import flask

app = flask.Flask(__name__)


@app.route("/ping", methods=["GET"])
def ping():
    status = 200 if handler.ready() else 404
    return flask.Response(response="\n", status=status, mimetype="application/json")


@app.route("/invocations", methods=["POST"])
def invocations():
    payload = flask.request.get_json(force=True, silent=True)
    if payload is None:
        return flask.jsonify(error="Expected a JSON body"), 415
    try:
        return flask.jsonify(handler.predict(payload))
    except ValueError as e:
        return flask.jsonify(error=str(e)), 400
{% else %}

from fastapi import FastAPI, HTTPException, Request, Response

app = FastAPI(title="{{ projectName }}")


@app.get("/ping")
def ping():
    return Response(status_code=200 if handler.ready() else 404)


@app.post("/invocations")
async def invocations(request: Request):
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=415, detail="Expected a JSON body")
    try:
        return handler.predict(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
{% endif %}

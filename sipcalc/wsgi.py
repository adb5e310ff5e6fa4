# run: flask --app sipcalc.wsgi run --port 5000 --debug

from sipcalc.app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(port=app.config["SIPCALC_SETTINGS"].port, debug=True)

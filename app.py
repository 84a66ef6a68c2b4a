import logging
import os

from flask import Flask

from nttprimes.api import ntt_bp

logging.basicConfig(level=os.getenv("NTT_LOG_LEVEL", "INFO"),
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = Flask(__name__)
app.register_blueprint(ntt_bp)

if __name__ == "__main__":
    app.run("127.0.0.1", int(os.getenv("PORT", "8082")), debug=True)

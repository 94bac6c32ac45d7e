import logging

import uvicorn

from mealrota.api.api_run import app
from mealrota.utilities.config import APP_HOST, APP_PORT, DEBUG
from mealrota.utilities.network import get_local_ip


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    local_ip = get_local_ip()
    print(f"Meal rotation planner on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    # Other devices sync through GET/PUT /state on this address
    if APP_HOST == "0.0.0.0" and local_ip != "127.0.0.1":
        print(f"Shared state for other devices at: http://{local_ip}:{APP_PORT}/state")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)

"""Simple entrypoint to print a recommendation from the local wardrobe store."""

import json
import os

from wardrobe_app.app import WardrobeEngineApp


def main() -> None:
    app = WardrobeEngineApp()
    user_id = os.getenv("WARDROBE_USER_ID", "demo")
    response = app.recommend_outfit(user_id=user_id, situation=os.getenv("WARDROBE_SITUATION"))
    print(json.dumps(response, indent=2, default=str))


if __name__ == "__main__":
    main()

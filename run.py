import logging

from engine.app import GameApp
from engine.settings import load_settings

def main():
    cfg = load_settings()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = GameApp(cfg)
    app.run()

if __name__ == "__main__":
    main()

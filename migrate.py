#!/usr/bin/env python3
"""
Gestión de migraciones de BizDesk con Alembic.

    python migrate.py create "mensaje"   # autogenerar revisión desde los modelos
    python migrate.py upgrade [rev]      # aplicar hasta head (o rev)
    python migrate.py downgrade [rev]    # revertir una revisión (o hasta rev)
    python migrate.py stamp [rev]        # marcar la base como migrada sin ejecutar nada
    python migrate.py history
    python migrate.py current
"""
import sys
from pathlib import Path

from alembic.config import Config
from alembic import command

from bizdesk.core.config import settings

ROOT_DIR = Path(__file__).parent


def get_alembic_config() -> Config:
    """Configuración de Alembic apuntando a la base definida en settings."""
    alembic_cfg = Config(str(ROOT_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return alembic_cfg


def create_migration(cfg: Config, message: str):
    command.revision(cfg, autogenerate=True, message=message)
    print(f"Migración creada: {message}")


def upgrade(cfg: Config, revision: str = "head"):
    command.upgrade(cfg, revision)
    print(f"Base de datos en {revision}")


def downgrade(cfg: Config, revision: str = "-1"):
    command.downgrade(cfg, revision)
    print(f"Rollback ejecutado hasta {revision}")


def stamp(cfg: Config, revision: str = "head"):
    command.stamp(cfg, revision)
    print(f"Base de datos marcada en {revision}")


COMMANDS = {
    "upgrade": upgrade,
    "downgrade": downgrade,
    "stamp": stamp,
    "history": lambda cfg: command.history(cfg),
    "current": lambda cfg: command.current(cfg),
}


def main(argv) -> int:
    if len(argv) < 2:
        print(__doc__)
        return 1

    action, args = argv[1], argv[2:]
    cfg = get_alembic_config()

    if action == "create":
        if not args:
            print("Error: Se requiere un mensaje para la migración")
            return 1
        create_migration(cfg, args[0])
        return 0

    handler = COMMANDS.get(action)
    if handler is None:
        print(f"Acción desconocida: {action}")
        return 1
    handler(cfg, *args)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

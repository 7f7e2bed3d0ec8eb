"""Initialize the sitecms database and media folders."""

from src.sitecms.config import load_config


def main() -> None:
    config = load_config()
    print(f"Database initialized: {config.database_url}")
    print(f"Media bucket: {config.storage.bucket_dir}")


if __name__ == "__main__":
    main()

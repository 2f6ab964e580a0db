from border_routes.config import BorderRoutesConfig

# Global config instance
config = BorderRoutesConfig.from_env()

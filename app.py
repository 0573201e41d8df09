from provisioner.logs import configure_logging
from provisioner.server import create_app
from provisioner.settings import Settings

settings = Settings()
configure_logging(settings.LOG_FILE_PATH)
app = create_app(settings)  # raises ConfigurationError when GITHUB_TOKEN is missing

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)

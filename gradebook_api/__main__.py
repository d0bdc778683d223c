import uvicorn

from gradebook_api.config import settings


def main():
    uvicorn.run("gradebook_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

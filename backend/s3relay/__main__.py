"""Run the upload relay: python -m s3relay"""
from s3relay.main import run

if __name__ == "__main__":
    run()

from lsbscan import create_app
from lsbscan.cli import main

# Create an app instance (flask --app manage run / flask --app manage analyze IMAGE)
app = create_app()

if __name__ == '__main__':
    main()

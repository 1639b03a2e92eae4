from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()   # Shared SQLAlchemy instance, bound to the app in create_app

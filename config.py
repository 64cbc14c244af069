import os
from urllib.parse import quote_plus
from dotenv import load_dotenv
from mysql.connector.constants import ClientFlag

from store import Store

load_dotenv()

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY')
    DB_HOST = os.getenv('DB_HOST', 'localhost')
    DB_PORT = int(os.getenv('DB_PORT', '3306'))
    DB_NAME = os.getenv('DB_NAME', 'finance_tracker')
    DB_USER = os.getenv('DB_USER', 'finance_user')
    DB_PASSWORD = os.getenv('DB_PASSWORD', 'finance_password')
    DB_POOL_SIZE = int(os.getenv('DB_POOL_SIZE', '5'))
    PORT = int(os.getenv('PORT', '3001'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def open_store(cls):
        return Store.open(
            pool_name="finance_pool",
            pool_size=cls.DB_POOL_SIZE,
            host=cls.DB_HOST,
            port=cls.DB_PORT,
            user=cls.DB_USER,
            password=cls.DB_PASSWORD,
            database=cls.DB_NAME,
            # report real affected rows so budget upserts can tell insert from overwrite
            client_flags=[-ClientFlag.FOUND_ROWS]
        )

    @classmethod
    def database_uri(cls):
        return (
            f"mysql+mysqlconnector://{quote_plus(cls.DB_USER)}:{quote_plus(cls.DB_PASSWORD)}"
            f"@{cls.DB_HOST}:{cls.DB_PORT}/{cls.DB_NAME}"
        )

import os
from dotenv import load_dotenv

load_dotenv()

db_backend = os.getenv("DB_BACKEND", "postgres")
user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST", "localhost")
port = os.getenv("DB_PORT", "5432")
db_name = os.getenv("DB_NAME")
sqlite_path = os.getenv("SQLITE_PATH", "treasure_board.sqlite3")
pepper_data = os.getenv("PEPPER_DATA", "")
contract_account_id = os.getenv("CONTRACT_ACCOUNT_ID", "treasureboard")
board_id_offset = int(os.getenv("BOARD_ID_OFFSET", "1"))
log_level = os.getenv("LOG_LEVEL", "INFO")

if __name__ == "__main__":
    print(db_backend, user, host, port, db_name, sqlite_path, contract_account_id, board_id_offset)

import configparser

config = configparser.ConfigParser()

config.read('config.ini')

DB_ENGINE = config.get('DATABASE', 'db_engine', fallback='sqlite')
DB_HOST = config.get('DATABASE', 'db_host', fallback='localhost')
DB_PORT = config.get('DATABASE', 'db_port', fallback='3306')
DB_USER = config.get('DATABASE', 'db_user', fallback='')
DB_PASSWORD = config.get('DATABASE', 'db_pwd', fallback='')
DB_DATABASE = config.get('DATABASE', 'db_database', fallback='data/chinook.db')
TEST_DB = config.get('DATABASE_TEST', 'db_database', fallback='data/chinook_test.db')

REPORT_DIR = config.get('REPORTS', 'output_dir', fallback='output')
LOG_FILE = config.get('LOGGING', 'log_file', fallback='logs/run_reports.log')
LOG_LEVEL = config.get('LOGGING', 'level', fallback='DEBUG')

__all__ = [
    'DB_ENGINE',
    'DB_HOST',
    'DB_PORT',
    'DB_USER',
    'DB_PASSWORD',
    'DB_DATABASE',
    'TEST_DB',
    'REPORT_DIR',
    'LOG_FILE',
    'LOG_LEVEL',
]

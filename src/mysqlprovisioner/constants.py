"""Shared constants for mysqlprovisioner."""

DIR_MODE = 0o700
FILE_MODE = 0o600

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_MYSQL_HOST = "127.0.0.1"
DEFAULT_ADMIN_USER = "root"
DEFAULT_USER_HOST = "%"
CONTAINER_MYSQL_HOST = "localhost"

DEFAULT_OUTPUT_DIR = "db_credential"
DEFAULT_ENV_FILE = ".env"
DEFAULT_CONFIG_FILE = ".mysqlprovision.yml"
CREDENTIAL_FILE_SUFFIX = ".cred"

MYSQL_CLIENT_BINARY = "mysql"
DOCKER_BINARY = "docker"
CONTAINER_NAME_TOKENS = ("mysql", "mariadb")
CONTAINER_PASSWORD_ENV = "MYSQL_PWD"

DATABASE_CHARSET = "utf8mb4"
DATABASE_COLLATION = "utf8mb4_general_ci"
REDUCED_PRIVILEGES = (
    "SELECT",
    "INSERT",
    "UPDATE",
    "DELETE",
    "CREATE",
    "DROP",
    "INDEX",
    "ALTER",
)

GENERATED_PASSWORD_BYTES = 16
FORBIDDEN_PASSWORD_CHARS = ("/", "\\")
PATH_SEPARATOR_CHARS = ("/", "\\")

import os
from dotenv import load_dotenv
from .repository.record_source import RecordSource
from .repository.record_store import RecordStore
from .search.engine import SearchEngine
from .search.matcher import MatchStrategy
from .search.ranker import RankPolicy
from .service.help_center import HelpCenterService
from .utils import log_utils


load_dotenv()

def check_env(name: str, default=None) -> str:
  value = os.environ.get(name, default)
  if value is None:
    raise ValueError(f'{name} environment variable is not set')
  return value

def check_bool_env(name: str, default: str = 'false') -> bool:
  return check_env(name, default).strip().lower() in ('1', 'true', 'yes')


LOG_LEVEL = log_utils.parse_level(check_env('LOG_LEVEL', 'INFO'))

# where the records come from: static, elasticsearch or mongodb
RECORD_SOURCE = check_env('RECORD_SOURCE', 'static')

# matching and ranking policy of the search engine
SEARCH_MATCH_STRATEGY = MatchStrategy(check_env('SEARCH_MATCH_STRATEGY', MatchStrategy.multi_field.value))
SEARCH_RANK_POLICY = RankPolicy(check_env('SEARCH_RANK_POLICY', RankPolicy.views.value))
SEARCH_RESULT_LIMIT = int(check_env('SEARCH_RESULT_LIMIT', '50'))

MEDIA_PUBLIC_BASE_URL = os.environ.get('MEDIA_PUBLIC_BASE_URL')
MEDIA_BUCKET = check_env('MEDIA_BUCKET', 'helpdesk_media')

REDIS_REFRESH_ENABLED = check_bool_env('REDIS_REFRESH_ENABLED')
REDIS_HOST = check_env('REDIS_HOST', 'localhost')
REDIS_PORT = int(check_env('REDIS_PORT', 6379))
REDIS_REFRESH_STREAM = check_env('REDIS_REFRESH_STREAM', 'helpcenter_updates')

CORS_ALLOWED_ORIGINS = check_env('CORS_ALLOWED_ORIGINS', 'http://localhost').split(' ')
CORS_ALLOWED_METHODS = check_env('CORS_ALLOWED_METHODS', '*').split(' ')
CORS_ALLOWED_HEADERS = check_env('CORS_ALLOWED_HEADERS', '*').split(' ')
CORS_ALLOW_CREDENTIALS = bool(check_env('CORS_ALLOW_CREDENTIALS', 'true') == 'true')


def create_record_source(kind: str) -> RecordSource:
  # backend specific settings are only required for the selected backend
  if kind == 'static':
    from .repository.static_source import StaticRecordSource
    return StaticRecordSource(
      path=os.environ.get('STATIC_DATA_PATH'),
      log_level=LOG_LEVEL,
    )

  if kind == 'elasticsearch':
    from .repository.elasticsearch_source import ElasticsearchRecordSource
    return ElasticsearchRecordSource(
      check_env('ELASTIC_HOST', 'https://localhost:9200'),
      check_env('ELASTIC_USER', 'elastic'),
      check_env('ELASTIC_PASSWORD'),
      check_env('ELASTIC_CA_PATH', 'certs/_data/ca/ca.crt'),
      not check_bool_env('ELASTIC_TLS_INSECURE'),
      log_level=LOG_LEVEL,
    )

  if kind == 'mongodb':
    from .repository.mongodb_source import MongoRecordSource
    return MongoRecordSource(
      check_env('MONGO_HOST', 'localhost'),
      int(check_env('MONGO_PORT', 27017)),
      db_name=check_env('MONGO_DB', 'helpcenter'),
      log_level=LOG_LEVEL,
    )

  raise ValueError(f"unknown RECORD_SOURCE '{kind}', must be one of 'static', 'elasticsearch', 'mongodb'")


record_store = RecordStore(
  create_record_source(RECORD_SOURCE),
  log_level=LOG_LEVEL,
)

search_engine = SearchEngine.from_config(
  match_strategy=SEARCH_MATCH_STRATEGY,
  rank_policy=SEARCH_RANK_POLICY,
  log_level=LOG_LEVEL,
)

help_center_service = HelpCenterService(
  store=record_store,
  engine=search_engine,
  default_limit=SEARCH_RESULT_LIMIT,
  media_base_url=MEDIA_PUBLIC_BASE_URL,
  media_bucket=MEDIA_BUCKET,
  log_level=LOG_LEVEL,
)


def get_help_center_service() -> HelpCenterService:
  return help_center_service

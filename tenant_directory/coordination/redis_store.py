# tenant_directory/coordination/redis_store.py
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

import redis.asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError, TimeoutError as RedisTimeoutError

from ..settings import settings as directory_settings
from .errors import (
    CoordinationConnectionError,
    CoordinationStoreError,
    NoNodeError,
    NodeExistsError,
    NotEmptyError,
)
from .paths import ROOT, ancestors, normalize_path, split_path
from .storage_interfaces import AbstractCoordinationStore

logger = logging.getLogger(__name__)

# KEYS: (node key, parent children key) per node of the chain, outermost first,
#       then the node key of the target's parent
# ARGV: payload, "1" when the parent node must already exist, one child name per chain node
# The last chain node is the target; the others are ancestors created empty when absent.
# Returns 1 when created, 0 when the target exists, -1 when the parent is missing
_CREATE_IF_ABSENT_LUA = """
local count = #ARGV - 2
if redis.call('EXISTS', KEYS[2 * count - 1]) == 1 then
    return 0
end
if ARGV[2] == '1' and redis.call('EXISTS', KEYS[2 * count + 1]) == 0 then
    return -1
end
for i = 1, count - 1 do
    redis.call('SET', KEYS[2 * i - 1], '', 'NX')
    redis.call('SADD', KEYS[2 * i], ARGV[i + 2])
end
redis.call('SET', KEYS[2 * count - 1], ARGV[1])
redis.call('SADD', KEYS[2 * count], ARGV[count + 2])
return 1
"""

# KEYS: node key, parent children key
# ARGV: key prefix, node path, child name within the parent, "1" for a recursive delete
# Descendant keys are derived from the prefix while walking the children sets.
# Returns the number of removed nodes, -1 when the node is missing, -2 when it has
# children and the delete is not recursive
_DELETE_SUBTREE_LUA = """
local prefix = ARGV[1]
local path = ARGV[2]
local is_root = path == '/'
if not is_root and redis.call('EXISTS', KEYS[1]) == 0 then
    return -1
end
local subtree = {path}
local index = 1
while index <= #subtree do
    local current = subtree[index]
    index = index + 1
    local members = redis.call('SMEMBERS', prefix .. ':children:' .. current)
    if #members > 0 and current == path and ARGV[4] ~= '1' then
        return -2
    end
    local base = current
    if current == '/' then
        base = ''
    end
    for _, name in ipairs(members) do
        subtree[#subtree + 1] = base .. '/' .. name
    end
end
for _, node in ipairs(subtree) do
    if node ~= '/' then
        redis.call('DEL', prefix .. ':node:' .. node)
    end
    redis.call('DEL', prefix .. ':children:' .. node)
end
if not is_root then
    redis.call('SREM', KEYS[2], ARGV[3])
end
return #subtree
"""


@contextmanager
def _translate_errors(operation: str, path: str) -> Iterator[None]:
    """Map redis-py exceptions onto the coordination store error taxonomy."""
    try:
        yield
    except CoordinationStoreError:
        raise
    except (RedisConnectionError, RedisTimeoutError) as e:
        logger.error(f"Store: Redis unreachable during {operation} of '{path}': {e}")
        raise CoordinationConnectionError(
            f"Redis unreachable during {operation} of '{path}'.", path=path, operation=operation
        ) from e
    except RedisError as e:
        logger.error(f"Store: Redis error during {operation} of '{path}': {e}", exc_info=True)
        raise CoordinationStoreError(
            f"Redis error during {operation} of '{path}': {e}", path=path, operation=operation
        ) from e


class RedisCoordinationStore(AbstractCoordinationStore):
    """
    Coordination tree stored in Redis and shared by every service process.

    Each node is two keys: '<prefix>:node:<path>' holds the payload and marks
    existence, '<prefix>:children:<path>' is the set of child segment names.
    The root node is implicit and always exists.
    """

    _redis_client: Optional[aioredis.Redis] = None

    def __init__(self, key_prefix: Optional[str] = None, client: Optional[aioredis.Redis] = None):
        """
        Args:
            key_prefix: Namespace for all keys, defaults to settings.redis_key_prefix
            client: Pre-built client; when omitted one is created from settings on initialize()
        """
        self.key_prefix = key_prefix or directory_settings.redis_key_prefix
        self._redis_client = client
        self._create_script = None
        self._delete_script = None
        logger.info(f"RedisCoordinationStore created. Key prefix: '{self.key_prefix}'")

    async def initialize(self) -> None:
        """Establish the Redis connection (unless a client was injected) and ping it."""
        if self._redis_client is None:
            connection_params = {
                "host": directory_settings.redis_host,
                "port": directory_settings.redis_port,
                "db": directory_settings.redis_db,
                "ssl": directory_settings.redis_ssl,
                "decode_responses": False,  # Payloads are opaque bytes
            }
            if directory_settings.redis_password:
                connection_params["password"] = directory_settings.redis_password

            logger.info(
                f"Connecting to Redis at {connection_params['host']}:"
                f"{connection_params['port']}, DB: {connection_params['db']}"
            )
            self._redis_client = aioredis.Redis(**connection_params)

        with _translate_errors("initialize", ROOT):
            try:
                await self._redis_client.ping()
            except RedisError:
                self._redis_client = None
                raise
        self._create_script = self._redis_client.register_script(_CREATE_IF_ABSENT_LUA)
        self._delete_script = self._redis_client.register_script(_DELETE_SUBTREE_LUA)
        logger.info("RedisCoordinationStore: Successfully connected to Redis and pinged.")

    async def teardown(self) -> None:
        if self._redis_client:
            logger.info("Closing Redis connection.")
            await self._redis_client.aclose()
            self._redis_client = None
            self._create_script = None
            self._delete_script = None
            logger.info("Redis connection closed.")
        else:
            logger.info("No active Redis connection to close.")

    def _get_client(self) -> aioredis.Redis:
        if not self._redis_client:
            raise RuntimeError("RedisCoordinationStore not initialized. Call initialize() first.")
        return self._redis_client

    def _node_key(self, path: str) -> str:
        return f"{self.key_prefix}:node:{path}"

    def _children_key(self, path: str) -> str:
        return f"{self.key_prefix}:children:{path}"

    async def exists(self, path: str) -> bool:
        path = normalize_path(path)
        if path == ROOT:
            return True
        with _translate_errors("exists", path):
            return await self._get_client().exists(self._node_key(path)) == 1

    async def get_data(self, path: str) -> bytes:
        path = normalize_path(path)
        if path == ROOT:
            return b""
        with _translate_errors("get_data", path):
            data = await self._get_client().get(self._node_key(path))
        if data is None:
            raise NoNodeError(path, operation="get_data")
        return data

    async def create(self, path: str, data: bytes = b"", make_parents: bool = False) -> str:
        path = normalize_path(path)
        if path == ROOT:
            raise NodeExistsError(path)
        self._get_client()
        chain = (ancestors(path) if make_parents else []) + [path]
        parent = split_path(path)[0]
        keys, names = [], []
        for node_path in chain:
            node_parent, name = split_path(node_path)
            keys += [self._node_key(node_path), self._children_key(node_parent)]
            names.append(name)
        keys.append(self._node_key(parent))
        # The implicit root is always present
        must_exist = not make_parents and parent != ROOT
        with _translate_errors("create", path):
            # Missing ancestors and the node itself are written in one script
            result = int(await self._create_script(keys=keys, args=[data, "1" if must_exist else "0", *names]))
        if result == 0:
            raise NodeExistsError(path)
        if result == -1:
            raise NoNodeError(parent, operation="create")
        logger.debug(f"Store: Created node '{path}' ({len(data)} bytes).")
        return path

    async def set_data(self, path: str, data: bytes) -> None:
        path = normalize_path(path)
        if path == ROOT:
            raise CoordinationStoreError("The root node carries no payload.", path=path, operation="set_data")
        with _translate_errors("set_data", path):
            # XX only overwrites an existing key
            written = await self._get_client().set(self._node_key(path), data, xx=True)
        if not written:
            raise NoNodeError(path, operation="set_data")

    async def delete(self, path: str, recursive: bool = False) -> None:
        path = normalize_path(path)
        self._get_client()
        parent, name = split_path(path) if path != ROOT else (ROOT, "")
        with _translate_errors("delete", path):
            # Existence check, subtree walk and removal run as one script
            removed = int(await self._delete_script(
                keys=[self._node_key(path), self._children_key(parent)],
                args=[self.key_prefix, path, name, "1" if recursive else "0"],
            ))
        if removed == -1:
            raise NoNodeError(path, operation="delete")
        if removed == -2:
            raise NotEmptyError(path)
        logger.debug(f"Store: Deleted node '{path}' and {removed - 1} descendant(s).")

    async def get_children(self, path: str) -> List[str]:
        path = normalize_path(path)
        client = self._get_client()
        with _translate_errors("get_children", path):
            async with client.pipeline(transaction=True) as pipe:
                pipe.exists(self._node_key(path))
                pipe.smembers(self._children_key(path))
                node_exists, members = await pipe.execute()
        if path != ROOT and not node_exists:
            raise NoNodeError(path, operation="get_children")
        return sorted(member.decode("utf-8") for member in members)

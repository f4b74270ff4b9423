import asyncio
import logging

from http_server.request import Request
from http_server.response import Response, error, response
from http_server.server import HTTPServer
from treestore.config import Settings
from treestore.engine import KeyStore, RecordStore
from treestore.models.exceptions import OrderingUndefinedError, RecordStoreError

logger = logging.getLogger()

USAGE = (
    "Tree store - PUT/GET/DELETE /keys, GET /keys/ordered, GET /tree/stats, "
    "GET /api/beverages for customer data or POST to /webhook for blockchain data ({name})"
)


def _missing(key) -> bool:
    return key is None or key == ""


def _valid_key(key) -> bool:
    """Keys are JSON strings or integers; bool is an int subclass but not a key."""
    return isinstance(key, (str, int)) and not isinstance(key, bool)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


async def main():
    settings = Settings.from_env()
    configure_logging(settings)

    server = HTTPServer(host=settings.host, port=settings.port)
    keys = await KeyStore.create()
    records = await RecordStore.create(settings.db_path)
    try:
        await register_routes(server, keys, records, settings)
        logger.debug(f"Registered routes: {server.routes}")
        await server.start()
    finally:
        records.close()


async def register_routes(
    server: HTTPServer,
    keys: KeyStore,
    records: RecordStore,
    settings: Settings | None = None,
):
    settings = settings or Settings()
    guard = settings.guard

    @server.route('/', ['GET'])
    async def index(request: Request) -> Response:
        return response().text(USAGE.format(name=guard.project_name()))

    @server.route('/keys', ['PUT'])
    async def put(request: Request) -> Response:
        key = request.get("key")
        value = request.get("value")

        if _missing(key) or value is None:
            return error(400, "Missing 'key' or 'value' in request body")
        if not _valid_key(key):
            return error(400, f"'key' must be a string or an integer, got {type(key).__name__}")

        try:
            success = await keys.put(key, value)
        except OrderingUndefinedError as e:
            return error(400, str(e))
        return response(status_code=200).json({"success": success})

    @server.route('/keys', ['GET'])
    async def get(request: Request) -> Response:
        key = request.get("key")
        if _missing(key):
            return error(400, "Missing 'key' parameter")
        if not _valid_key(key):
            return error(400, f"'key' must be a string or an integer, got {type(key).__name__}")

        try:
            found = await keys.has(key)
        except OrderingUndefinedError as e:
            return error(400, str(e))
        if not found:
            return error(404, f"Key not found: {key}")

        value = await keys.get(key)
        return response(status_code=200).json({"key": key, "value": value})

    @server.route('/keys', ['DELETE'])
    async def delete(request: Request) -> Response:
        key = request.get("key")
        if _missing(key):
            return error(400, "Missing 'key' parameter")
        if not _valid_key(key):
            return error(400, f"'key' must be a string or an integer, got {type(key).__name__}")

        try:
            success = await keys.delete(key)
        except OrderingUndefinedError as e:
            return error(400, str(e))
        return response(status_code=200).json({"success": success})

    @server.route('/keys/ordered', ['GET'])
    async def ordered(request: Request) -> Response:
        order = request.get("order", "in")
        if order not in KeyStore.ORDERS:
            return error(400, f"'order' must be one of: {', '.join(KeyStore.ORDERS)}")

        return response(status_code=200).json({"order": order, "keys": await keys.keys(order)})

    @server.route('/tree/stats', ['GET'])
    async def stats(request: Request) -> Response:
        return response(status_code=200).json(await keys.stats())

    @server.route('/api/beverages', ['GET'])
    async def beverages(request: Request) -> Response:
        try:
            results = await records.customers_by_company(settings.company_name)
        except RecordStoreError as e:
            logger.error(f"Database query failed: {e}")
            return error(500, "Failed to fetch beverages data")

        return response(
            status_code=200, headers={"cache-control": "public, max-age=60"}
        ).json(results)

    @server.route('/webhook', ['POST'])
    async def webhook(request: Request) -> Response:
        failure = guard.apply("Failed to process blockchain webhook for My Cool Project")
        try:
            payload = request.json()
            webhook_id, timestamp = await records.store_webhook(payload)
        except (ValueError, RecordStoreError) as e:
            logger.error(f"Failed to process blockchain webhook: {e}")
            return response(status_code=500).json(
                {"success": False, "error": failure, "details": str(e)}
            )

        return response(status_code=200).json({
            "success": True,
            "message": guard.apply("Blockchain webhook received and stored for My Cool Project"),
            "webhookId": webhook_id,
            "timestamp": timestamp,
        })

    @server.route('/webhook', ['GET', 'PUT', 'DELETE', 'PATCH', 'HEAD', 'OPTIONS'])
    async def webhook_method_not_allowed(request: Request) -> Response:
        return error(405, "Method not allowed. Only POST requests are accepted.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass

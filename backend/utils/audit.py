import logging

logger = logging.getLogger("storefront.audit")

def write_log(*, user_id=None, action, resource, status="SUCCESS", ip=None, meta=None):
    logger.info(
        "%s %s %s user_id=%s ip=%s meta=%s",
        action, resource, status, user_id, ip, meta or {},
        extra={"action": action, "resource": resource, "status": status, "user_id": user_id, "ip": ip, "meta": meta or {}},
    )

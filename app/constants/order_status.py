PLACED = "placed"
PAID = "paid"
PROCESSING = "processing"
SHIPPED = "shipped"
DELIVERED = "delivered"
FAILED = "failed"
CANCELLED = "cancelled"

# orders that count towards first-order and per-user coupon usage checks
COMPLETED_STATUSES = (PLACED, PAID, PROCESSING, SHIPPED, DELIVERED)

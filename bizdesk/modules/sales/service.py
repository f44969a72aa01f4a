"""
Servicio de ventas

Registra ventas de un producto (por caja y/o por kg), pagos posteriores y
eliminaciones directas. Cada operación mantiene sincronizados el stock del
producto y el saldo del cliente dentro de la misma transacción.
"""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import func
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
import logging

from bizdesk.common.access import get_owned_record, generate_reference
from bizdesk.common.periods import StatsPeriod, period_start
from bizdesk.database.database import get_owned_query
from bizdesk.modules.sales.models import Sale, SaleAudit, PaymentStatus
from bizdesk.modules.sales.schemas import SaleCreate, SalePayment, SaleStats
from bizdesk.modules.products.models import Product
from bizdesk.modules.products.service import apply_sale_to_stock
from bizdesk.modules.customers.models import Customer
from bizdesk.modules.customers.service import adjust_customer_balance

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def derive_payment_status(amount_paid: Decimal, total_amount: Decimal) -> PaymentStatus:
    if amount_paid >= total_amount:
        return PaymentStatus.COMPLETED
    if amount_paid > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.PENDING


def reverse_sale_effects(db: Session, sale: Sale) -> None:
    """Repone el stock vendido y retira del saldo del cliente lo que quedaba pendiente."""
    product = db.query(Product).filter(Product.id == sale.product_id).first()
    if product is not None:
        apply_sale_to_stock(product, -int(sale.boxes_quantity or 0), -Decimal(sale.kg_quantity or 0))
    if sale.customer_id:
        customer = db.query(Customer).filter(Customer.id == sale.customer_id).first()
        adjust_customer_balance(customer, -Decimal(sale.remaining_amount or 0))


def remove_sale(db: Session, sale: Sale) -> None:
    """
    Elimina la venta revirtiendo sus efectos. Las auditorías que la
    referencian conservan sus instantáneas y quedan con sale_id nulo.
    """
    reverse_sale_effects(db, sale)
    db.query(SaleAudit).filter(SaleAudit.sale_id == sale.id).update(
        {SaleAudit.sale_id: None}, synchronize_session="fetch"
    )
    db.delete(sale)


class SaleService:
    """Servicio principal de ventas"""

    def __init__(self, db: Session):
        self.db = db

    def list_sales(self, user_id: UUID, payment_status: Optional[PaymentStatus] = None) -> List[Sale]:
        query = get_owned_query(self.db, Sale, user_id)
        if payment_status:
            query = query.filter(Sale.payment_status == payment_status.value)
        return query.order_by(Sale.created_at.desc()).all()

    def get_sale(self, sale_id: UUID, user_id: UUID) -> Sale:
        return get_owned_record(self.db, Sale, sale_id, user_id, "Venta")

    def create_sale(self, data: SaleCreate, user_id: UUID) -> Sale:
        """
        Registrar una venta.

        - subtotal = cajas × precio caja + kg × precio kg; total = subtotal + impuesto
        - el estado de pago se deriva de lo pagado
        - descuenta el stock del producto (nunca por debajo de cero)
        - si hay cliente y queda saldo pendiente, se suma a su saldo
        """
        try:
            product = get_owned_record(self.db, Product, data.product_id, user_id, "Producto", for_update=True)

            customer = None
            if data.customer_id:
                customer = get_owned_record(self.db, Customer, data.customer_id, user_id, "Cliente", for_update=True)

            client_name = data.client_name or (customer.name if customer else None)
            if not client_name:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Debe indicar el nombre del cliente o un cliente registrado"
                )

            box_price = data.box_price if data.box_price is not None else Decimal(product.price_per_box or 0)
            kg_price = data.kg_price if data.kg_price is not None else Decimal(product.price_per_kg or 0)
            profit_per_box = data.profit_per_box if data.profit_per_box is not None else \
                box_price - Decimal(product.cost_per_box or 0)
            profit_per_kg = data.profit_per_kg if data.profit_per_kg is not None else \
                kg_price - Decimal(product.cost_per_kg or 0)

            subtotal = Decimal(data.boxes_quantity) * box_price + data.kg_quantity * kg_price
            total_amount = subtotal + data.tax

            if data.amount_paid > total_amount:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"El monto pagado ({data.amount_paid}) excede el total de la venta ({total_amount})"
                )

            remaining_amount = total_amount - data.amount_paid

            sale = Sale(
                user_id=user_id,
                sale_number=generate_reference("sale"),
                product_id=product.id,
                customer_id=customer.id if customer else None,
                client_name=client_name,
                phone_number=data.phone_number or (customer.phone if customer else None),
                boxes_quantity=data.boxes_quantity,
                kg_quantity=data.kg_quantity,
                box_price=box_price,
                kg_price=kg_price,
                profit_per_box=profit_per_box,
                profit_per_kg=profit_per_kg,
                subtotal=subtotal,
                tax=data.tax,
                total_amount=total_amount,
                amount_paid=data.amount_paid,
                remaining_amount=remaining_amount,
                payment_status=derive_payment_status(data.amount_paid, total_amount).value,
                payment_method=data.payment_method,
                notes=data.notes,
                performed_by=user_id
            )
            self.db.add(sale)

            apply_sale_to_stock(product, data.boxes_quantity, data.kg_quantity)
            if remaining_amount > 0:
                adjust_customer_balance(customer, remaining_amount)

            self.db.commit()
            self.db.refresh(sale)

            logger.info(
                f"Sale {sale.sale_number} created: total={total_amount} paid={data.amount_paid} "
                f"product={product.id} stock_box={product.quantity_box}"
            )
            return sale

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando venta: {str(e)}"
            )

    def add_payment(self, sale_id: UUID, payment: SalePayment, user_id: UUID) -> Sale:
        """Registrar un abono sobre el saldo pendiente de la venta."""
        try:
            sale = get_owned_record(self.db, Sale, sale_id, user_id, "Venta", for_update=True)
            remaining = Decimal(sale.remaining_amount or 0)

            if payment.amount > remaining:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"El abono ({payment.amount}) excede el saldo pendiente ({remaining})"
                )

            sale.amount_paid = Decimal(sale.amount_paid or 0) + payment.amount
            sale.remaining_amount = remaining - payment.amount
            sale.payment_status = derive_payment_status(sale.amount_paid, Decimal(sale.total_amount)).value
            if payment.payment_method:
                sale.payment_method = payment.payment_method

            if sale.customer_id:
                customer = self.db.query(Customer).filter(Customer.id == sale.customer_id).first()
                adjust_customer_balance(customer, -payment.amount)

            self.db.commit()
            self.db.refresh(sale)

            logger.info(f"Payment of {payment.amount} added to sale {sale.sale_number}; remaining {sale.remaining_amount}")
            return sale

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error registrando pago: {str(e)}"
            )

    def delete_sale(self, sale_id: UUID, user_id: UUID) -> dict:
        """Eliminación directa (sin auditoría)."""
        try:
            sale = get_owned_record(self.db, Sale, sale_id, user_id, "Venta", for_update=True)
            remove_sale(self.db, sale)
            self.db.commit()

            logger.info(f"Sale {sale_id} deleted directly")
            return {"message": "Venta eliminada exitosamente", "sale_id": str(sale_id)}

        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando venta: {str(e)}"
            )

    def get_stats(self, user_id: UUID, period: StatsPeriod) -> SaleStats:
        start = period_start(period)
        count, revenue = self.db.query(
            func.count(Sale.id),
            func.coalesce(func.sum(Sale.amount_paid), 0)
        ).filter(
            Sale.user_id == user_id,
            Sale.created_at >= start
        ).one()

        revenue = Decimal(revenue or 0)
        average = (revenue / count).quantize(Decimal("0.01")) if count else ZERO
        return SaleStats(
            period=period.value,
            total_sales=count,
            total_revenue=revenue,
            average_order_value=average
        )

"""Receipt (comprobante de pedido) rendering for closed sales."""
from typing import Iterable

from flask import current_app
from markupsafe import escape

from restock.utils.formatters import money_ar

RECEIPT_STYLE = """
    body { font-family: Arial, sans-serif; margin: 0; padding: 0; background-color: #f4f4f4; }
    .container { max-width: 600px; margin: 20px auto; background-color: #fff; padding: 20px;
                 box-shadow: 0 0 10px rgba(0, 0, 0, 0.1); }
    .header { text-align: center; padding: 10px 0; border-bottom: 1px solid #ddd; }
    .header h1 { margin: 0; font-size: 24px; color: #333; }
    .content { margin: 20px 0; }
    .content h2 { font-size: 18px; color: #333; margin-bottom: 10px; }
    .content p { margin: 5px 0; font-size: 16px; color: #555; }
    .table { width: 100%; border-collapse: collapse; margin: 20px 0; }
    .table th, .table td { border: 1px solid #ddd; padding: 8px; text-align: left; }
    .table th { background-color: #f4f4f4; color: #333; }
    .footer { text-align: center; padding: 10px 0; border-top: 1px solid #ddd; }
    .footer p { margin: 0; font-size: 14px; color: #777; }
"""


def _line_rows(lines: Iterable) -> str:
    return "".join(
        f"""
                <tr>
                    <td>{escape(line.product_name)}</td>
                    <td>{line.quantity}</td>
                    <td>{money_ar(line.price_per_unit)}</td>
                    <td>{money_ar(line.total_price)}</td>
                </tr>
        """
        for line in lines
    )


def render_receipt_html(sale, lines) -> str:
    """
    Render the HTML receipt for a sale.

    Args:
        sale: Object with user_name, table_name, date, tip and total_price
        lines: Objects with product_name, quantity, price_per_unit and total_price

    Returns:
        Complete HTML document (UTF-8)
    """
    restaurant = current_app.config.get('RESTAURANT_NAME', 'Restaurante RESTOCK')
    tip_label = current_app.config.get('TIP_RATE_LABEL', '10% del total')

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>{RECEIPT_STYLE}</style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{escape(restaurant)}</h1>
            <p>Comprobante de Pedido</p>
        </div>
        <div class="content">
            <h2>Detalles del Pedido</h2>
            <p><strong>Atendido por:</strong> {escape(sale.user_name)}</p>
            <p><strong>Mesa:</strong> {escape(sale.table_name)}</p>
            <p><strong>Fecha:</strong> {escape(sale.date)}</p>
            <p><strong>Propina:</strong> {money_ar(sale.tip)} ({escape(tip_label)})</p>
            <h2>Productos</h2>
            <table class="table">
                <thead>
                    <tr>
                        <th>Producto</th>
                        <th>Cantidad</th>
                        <th>Precio (c/u)</th>
                        <th>Total</th>
                    </tr>
                </thead>
                <tbody>
                {_line_rows(lines)}
                </tbody>
            </table>
            <p><strong>Total de la Orden:</strong> {money_ar(sale.total_price)}</p>
        </div>
        <div class="footer">
            <p>Gracias por su visita. ¡Esperamos verlo pronto!</p>
        </div>
    </div>
</body>
</html>
"""


"""Staff notes on orders: command and handler."""

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class AddAdminNote:
    order_id = Identifier(required=True)
    note = Text(required=True)


@ordering.command_handler(part_of=Order)
class AdminNotesHandler:
    @handle(AddAdminNote)
    def add_admin_note(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.add_admin_note(command.note)
        repo.add(order)

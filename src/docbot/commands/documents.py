"""Document registry commands: add document, remove document, list documents."""

from typing import Any

from docbot.runtime import CommandBinding

from .common import DOC_ID, NAME, CommandContext, arguments, command_prefix

__all__ = ["ADD_DOCUMENT", "LIST_DOCUMENTS", "REMOVE_DOCUMENT"]


def add_document(args: dict[str, Any], context: CommandContext) -> str:
    context.documents.add(args["name"], args["id"])
    return f"Successfully added document {args['name']}"


def remove_document(args: dict[str, Any], context: CommandContext) -> str:
    context.documents.remove(args["name"])
    return f"Successfully removed document {args['name']}"


def list_documents(_args: object, context: CommandContext) -> str:
    listing = "\n".join(f"{name}: {doc_id}" for name, doc_id in context.documents.read().items())
    return "\n```" + listing + "```"


ADD_DOCUMENT = CommandBinding(
    name="add document",
    prefix=command_prefix("add", "document"),
    arguments=arguments().add(NAME).add(DOC_ID).named("name", "id"),
    handler=add_document,
    help="""add document <NAME> <DOCUMENT-ID>:
    add a document to the bot's database
    <NAME> is a name you'll use to refer to that document later
    <DOCUMENT-ID> you can find in the document's url after .../spreadsheets/d/""",
)

REMOVE_DOCUMENT = CommandBinding(
    name="remove document",
    prefix=command_prefix("remove", "document"),
    arguments=arguments().add(NAME).named("name"),
    handler=remove_document,
    help="remove document <NAME>",
)

LIST_DOCUMENTS = CommandBinding(
    name="list documents",
    prefix=command_prefix("list", "documents"),
    arguments=arguments(),
    handler=list_documents,
    help="list documents",
)

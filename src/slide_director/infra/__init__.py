from slide_director.infra.document_store import DocumentStore, SlideDeck
from slide_director.infra.image_library import AssetStore, ImageLibrary

__all__ = ["AssetStore", "DocumentStore", "ImageLibrary", "SlideDeck"]

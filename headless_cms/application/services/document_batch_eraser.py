"""Erase documents in store-sized atomic batches.

Each batch is one atomic commit; batches run strictly in order. A failed
batch aborts the erase, leaving earlier batches committed.
"""

import logging

from headless_cms.application.dtos.content import DocumentRef
from headless_cms.application.interfaces.repositories import IContentDocumentRepository
from headless_cms.domain.exceptions import DocumentBatchDeleteError
from headless_cms.shared.utils.batching import chunked

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_BATCH_LIMIT = 500


class DocumentBatchEraser:
    """Delete a list of document refs in consecutive batches of at most batch_limit."""

    def __init__(
        self,
        document_repo: IContentDocumentRepository,
        batch_limit: int = DEFAULT_DOCUMENT_BATCH_LIMIT,
    ) -> None:
        if batch_limit < 1:
            raise ValueError(f"batch_limit must be positive, got {batch_limit}")
        self._document_repo = document_repo
        self.batch_limit = min(batch_limit, document_repo.batch_limit)

    async def erase(self, refs: list[DocumentRef]) -> int:
        """Delete refs batch by batch.

        Args:
            refs: Documents to delete; may be empty.

        Returns:
            Number of committed batches (ceil(len(refs) / batch_limit)).

        Raises:
            DocumentBatchDeleteError: A batch failed; later batches were not attempted.
        """
        committed = 0
        for index, batch in enumerate(chunked(refs, self.batch_limit)):
            try:
                await self._document_repo.batch_delete(batch)
            except Exception as e:
                logger.error(
                    "Document batch %d (%d refs) failed after %d committed: %s",
                    index,
                    len(batch),
                    committed,
                    e,
                )
                raise DocumentBatchDeleteError(index, committed, str(e)) from e
            committed += 1
            logger.debug("Committed document batch %d (%d refs)", index, len(batch))
        return committed

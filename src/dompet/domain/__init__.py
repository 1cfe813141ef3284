"""Domain layer for dompet application.

Services are imported from their own modules (``dompet.domain.transaction``
and so on); the database layer imports ``dompet.domain.entities`` and this
package must stay importable from there.
"""

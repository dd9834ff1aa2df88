from models.chart_of_accounts import ChartOfAccounts
from models.party import Party, PartyType
from models.general_journal import GeneralJournal
from models.journal_line import JournalLine

__all__ = ['ChartOfAccounts', 'GeneralJournal', 'JournalLine', 'Party', 'PartyType']

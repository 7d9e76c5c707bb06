import unittest
from datetime import date

from bankstatementparser.amounts import find_amounts, parse_amount
from bankstatementparser.direction import determine_direction, validate_balance
from bankstatementparser.models import FlowDirection, TransactionRecord
from bankstatementparser.segment import extract_description, find_category, parse_transaction_segment

JAN1 = date(2021, 1, 1)


class AmountTest(unittest.TestCase):
  def test_finds_money_substrings_in_order(self):
    text = 'Kauf DE0007664039 4788270820210421 1.101,46 € 264,00 €'
    self.assertEqual(find_amounts(text), ['1.101,46 €', '264,00 €'])

  def test_reference_numbers_are_not_money(self):
    self.assertEqual(find_amounts('INC. DL-,01 6932977820240215 100,25 € 1099,75 €'),
                     ['100,25 €', '1099,75 €'])

  def test_parse_locale_amounts(self):
    self.assertEqual(parse_amount('1.101,46 €'), 1101.46)
    self.assertEqual(parse_amount('0,53 €'), 0.53)
    self.assertEqual(parse_amount('-12,00 €'), -12.0)
    self.assertEqual(parse_amount('+5 €'), 5.0)
    self.assertIsNone(parse_amount(' € '))
    self.assertIsNone(parse_amount(None))

  def test_malformed_amount_is_absent_and_logged(self):
    with self.assertLogs('bankstatementparser.amounts', level='WARNING') as cm:
      self.assertIsNone(parse_amount('1,2,3 €'))
    self.assertEqual(cm.records[0].amount, '1,2,3 €')


class CategoryTest(unittest.TestCase):
  def test_known_category_prefix(self):
    self.assertEqual(find_category('Überweisung Test transaction'), ('Überweisung', True))

  def test_category_must_end_at_word_boundary(self):
    with self.assertLogs('bankstatementparser.segment', level='WARNING') as cm:
      category, known = find_category('Handelsplatz Gebühr 1,00 € 2,00 €')
    self.assertEqual(category, 'Handelsplatz')
    self.assertFalse(known)
    self.assertEqual(cm.records[0].category, 'Handelsplatz')

  def test_unknown_category_falls_back_to_first_word(self):
    with self.assertLogs('bankstatementparser.segment', level='WARNING'):
      self.assertEqual(find_category('Sparplan Ausführung'), ('Sparplan', False))

  def test_description_drops_category_and_money(self):
    desc = extract_description('Handel Kauf Handel 236,00 € 264,00 €', 'Handel', ['236,00 €', '264,00 €'])
    self.assertEqual(desc, 'Kauf Handel')


class DirectionTest(unittest.TestCase):
  def test_balance_increase_is_inflow(self):
    self.assertIs(determine_direction(100.0, 110.0, 'Handel'), FlowDirection.IN)

  def test_balance_decrease_or_equal_is_outflow(self):
    self.assertIs(determine_direction(100.0, 50.0, 'Überweisung'), FlowDirection.OUT)
    self.assertIs(determine_direction(100.0, 100.0, 'Überweisung'), FlowDirection.OUT)

  def test_category_decides_without_previous_balance(self):
    self.assertIs(determine_direction(None, 10.0, 'Zinszahlung'), FlowDirection.IN)
    self.assertIs(determine_direction(None, 10.0, 'Kartentransaktion'), FlowDirection.OUT)
    self.assertIs(determine_direction(None, 10.0, 'Unbekannt'), FlowDirection.OUT)
    self.assertIs(determine_direction(None, 10.0, None), FlowDirection.OUT)


class BalanceValidatorTest(unittest.TestCase):
  def _record(self, received=None, spent=None, balance=0.0):
    return TransactionRecord(JAN1, 'Handel', 'x', received, spent, balance)

  def test_opening_row_is_not_checked(self):
    with self.assertNoLogs('bankstatementparser.direction', level='WARNING'):
      self.assertIsNone(validate_balance(self._record(spent=1.0, balance=5.0), None))

  def test_within_epsilon(self):
    with self.assertNoLogs('bankstatementparser.direction', level='WARNING'):
      self.assertIsNone(validate_balance(self._record(received=0.1, balance=100.305), 100.2))

  def test_mismatch_is_reported(self):
    record = self._record(spent=236.0, balance=264.0)
    with self.assertLogs('bankstatementparser.direction', level='WARNING') as cm:
      mismatch = validate_balance(record, 600.0)
    self.assertEqual(len(cm.records), 1)
    self.assertIs(cm.records[0].transaction, record)
    self.assertAlmostEqual(cm.records[0].expected, 364.0)
    self.assertEqual(cm.records[0].actual, 264.0)
    self.assertAlmostEqual(mismatch.expected, 364.0)
    self.assertEqual(mismatch.previous, 600.0)


class SegmentParserTest(unittest.TestCase):
  def test_first_row_uses_category(self):
    record = parse_transaction_segment('Überweisung Test transaction 100,00 € 100,00 €', JAN1)
    self.assertEqual(record.date, JAN1)
    self.assertEqual(record.category, 'Überweisung')
    self.assertEqual(record.description, 'Test transaction')
    self.assertEqual(record.received, 100)
    self.assertIsNone(record.spent)
    self.assertEqual(record.balance, 100)

  def test_balance_decrease_is_spent(self):
    record = parse_transaction_segment('Überweisung Auszahlung 50,00 € 50,00 €', JAN1, previous_balance=100.0)
    self.assertEqual(record.spent, 50)
    self.assertIsNone(record.received)
    self.assertEqual(record.amount, -50)
    self.assertIs(record.direction, FlowDirection.OUT)

  def test_trade_with_balance_increase_is_inflow(self):
    record = parse_transaction_segment('Handel Verkauf DE0007664039 80,00 € 180,00 €', JAN1, previous_balance=100.0)
    self.assertEqual(record.received, 80)
    self.assertIsNone(record.spent)

  def test_earlier_money_substrings_stay_out_of_amount(self):
    segment = 'Handel Kauf 3 Stück zu 12,50 € 37,50 € 62,50 €'
    record = parse_transaction_segment(segment, JAN1, previous_balance=100.0)
    self.assertEqual(record.spent, 37.5)
    self.assertEqual(record.balance, 62.5)
    self.assertEqual(record.description, 'Kauf 3 Stück zu')

  def test_incomplete_segment_still_produces_record(self):
    with self.assertLogs('bankstatementparser.segment', level='WARNING'):
      record = parse_transaction_segment('Zinszahlung Your interest payment 0,53 €', JAN1)
    self.assertEqual(record.category, 'Zinszahlung')
    self.assertEqual(record.description, 'Your interest payment')
    self.assertIsNone(record.received)
    self.assertIsNone(record.spent)
    self.assertIsNone(record.balance)


if __name__ == '__main__':
  unittest.main()

# priorityq.py is part of DisjointPaths
#
# DisjointPaths is free software; you may redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option)
# any later version. You should have received a copy of the GNU General Pu-
# blic License along with this program. If not, see
# <https://www.gnu.org/licenses/>.
#
# (C) 2020 Athanasios Mattas
# ==========================================================================
"""Indexed priority queue, used as the frontier of the shortest-path search."""

import heapq
import itertools


class PriorityQueue:
  """A heapq-based priority queue, indexed by a unique entry_id.

  heapq does not support updating the priority of an entry in place. Instead,
  on update, the old entry is marked as REMOVED and a new one is pushed. The
  entry_finder dictionary points to the live entry of each entry_id.

  Entries are lists, with the priority first and the entry_id last:

                    [priority, entry_attrs, entry_id]

  An insertion counter is placed right after the priority. It breaks ties in
  FIFO order, so the queue never compares entry_attrs or entry_ids and pops
  deterministically:

                 [priority, entry_count, entry_attrs, entry_id]

  The counter is hidden from the user; every entry returned has it removed.

  Args:
    data (list) : initial entries [[priority, entry_attrs, entry_id],]
                  (default: None)
  """
  # placeholder for a removed entry
  _REMOVED = "<removed-entry>"

  def __init__(self, data=None):
    self._heapq = []
    self._entry_finder = {}
    self._counter = itertools.count()
    for entry in data or []:
      self.push(entry)

  def __len__(self):
    return len(self._entry_finder)

  def __bool__(self):
    return bool(self._entry_finder)

  def __contains__(self, entry_id):
    return entry_id in self._entry_finder

  def __getitem__(self, entry_id):
    entry = self._entry_finder[entry_id].copy()
    del entry[1]
    return entry

  def __setitem__(self, entry_id, entry):
    """Adds a new entry or replaces the existing one with the same id."""
    if entry_id in self._entry_finder:
      del self[entry_id]
    entry = entry.copy()
    entry.insert(1, next(self._counter))
    self._entry_finder[entry_id] = entry
    heapq.heappush(self._heapq, entry)

  def __delitem__(self, entry_id):
    """Marks the entry as REMOVED. Raises KeyError if entry_id is not found."""
    entry = self._entry_finder.pop(entry_id)
    entry[-1] = self._REMOVED

  def push(self, entry):
    self[entry[-1]] = entry

  def relax_priority(self, entry):
    """Pushes the entry, unless an entry with the same id and a lower or equal
    priority is already queued.

    Returns:
      relaxed (bool) : whether the entry was pushed
    """
    entry_id = entry[-1]
    if ((entry_id in self._entry_finder)
            and (self._entry_finder[entry_id][0] <= entry[0])):
      return False
    self[entry_id] = entry
    return True

  def pop_low(self):
    """Pops the lowest priority entry. Raises KeyError if empty."""
    while self._heapq:
      entry = heapq.heappop(self._heapq)
      if entry[-1] != self._REMOVED:
        del self._entry_finder[entry[-1]]
        del entry[1]
        return entry
    raise KeyError("Trying to pop from an empty PriorityQueue.")

  def peek(self):
    """Returns the lowest priority entry, without popping it.

    Raises IndexError if empty.
    """
    while self._heapq[0][-1] == self._REMOVED:
      heapq.heappop(self._heapq)
    entry = self._heapq[0].copy()
    del entry[1]
    return entry

  def __iter__(self):
    heapq_ = [entry.copy() for entry in self._heapq
              if entry[-1] != self._REMOVED]
    heapq.heapify(heapq_)
    while heapq_:
      entry = heapq.heappop(heapq_)
      del entry[1]
      yield entry

  def clear(self):
    self._heapq.clear()
    self._entry_finder.clear()

  def keys(self):
    return list(self._entry_finder.keys())
